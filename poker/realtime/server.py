"""Socket.IO wiring for the realtime core."""
from dataclasses import dataclass
from typing import Callable, Optional

import socketio

from poker.core.config import Settings, settings as default_settings
from poker.core.logging_config import get_logger
from poker.realtime.dispatcher import CommandDispatcher
from poker.realtime.engine import VoteEngine
from poker.realtime.gateway import SocketIOGateway
from poker.realtime.sessions import RoomSessionManager

logger = get_logger(__name__)


@dataclass
class RealtimeServer:
    """Everything one server process needs to serve realtime clients."""

    sio: socketio.AsyncServer
    gateway: SocketIOGateway
    sessions: RoomSessionManager
    engine: VoteEngine
    dispatcher: CommandDispatcher


def _command_handler(dispatcher: CommandDispatcher, event: str) -> Callable:
    async def handler(sid, data=None):
        await dispatcher.dispatch(sid, event, data)
    handler.__name__ = f"on_{event.replace('-', '_')}"
    return handler


def register_handlers(sio: socketio.AsyncServer, dispatcher: CommandDispatcher) -> None:
    """Attach connect/disconnect and one handler per command to ``sio``."""

    async def connect(sid, environ, auth=None):
        logger.info("socket_connected", sid=sid)

    async def disconnect(sid, reason=None):
        logger.info("socket_disconnected", sid=sid, reason=str(reason) if reason else None)
        await dispatcher.disconnect(sid)

    sio.on("connect", handler=connect)
    sio.on("disconnect", handler=disconnect)

    for event in dispatcher.commands:
        sio.on(event, handler=_command_handler(dispatcher, event))


def create_realtime(
    config: Optional[Settings] = None,
    session_factory: Optional[Callable] = None,
) -> RealtimeServer:
    """Build a Socket.IO server with its own session manager and engine."""
    config = config or default_settings

    sio = socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=config.CORS_ORIGINS if config.CORS_ORIGINS != ["*"] else "*",
        logger=False,
        engineio_logger=False,
    )
    gateway = SocketIOGateway(sio)
    sessions = RoomSessionManager(gateway)
    engine = VoteEngine(
        gateway,
        allow_votes_after_reveal=config.ALLOW_VOTES_AFTER_REVEAL,
        strict_estimates=config.STRICT_ESTIMATES,
    )

    dispatcher_kwargs = {}
    if session_factory is not None:
        dispatcher_kwargs["session_factory"] = session_factory
    dispatcher = CommandDispatcher(gateway, sessions, engine, **dispatcher_kwargs)

    register_handlers(sio, dispatcher)

    return RealtimeServer(sio=sio, gateway=gateway, sessions=sessions, engine=engine, dispatcher=dispatcher)
