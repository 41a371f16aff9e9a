"""Routes inbound realtime commands to the session manager and vote engine."""
import asyncio
from contextlib import AbstractContextManager
from typing import Any, Awaitable, Callable, Dict, Tuple, Type

import pydantic
import structlog
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from poker.core import constants
from poker.core.exceptions import PokerError, describe_validation_errors
from poker.core.logging_config import get_logger
from poker.db.session import get_db_context
from poker.realtime.engine import VoteEngine
from poker.realtime.gateway import Gateway
from poker.realtime.sessions import RoomSessionManager
from poker.schemas.events import (
    JoinRoomCommand,
    RevealVotesCommand,
    SetAdminCommand,
    StartVoteCommand,
    SubmitVoteCommand,
)

logger = get_logger(__name__)

Handler = Callable[[Session, str, Any], Awaitable[None]]


class CommandDispatcher:
    """
    Validate, authorize and execute one client command at a time.

    Every failure is reported to the originating connection as an ``error``
    event carrying a plain message string; nothing propagates to the
    transport.

    Args:
        gateway: Outbound channel, used here only for ``error`` events
        sessions: Live presence manager
        engine: Vote state machine
        session_factory: Zero-argument callable returning a context manager
            that yields a SQLAlchemy session
    """

    def __init__(
        self,
        gateway: Gateway,
        sessions: RoomSessionManager,
        engine: VoteEngine,
        session_factory: Callable[[], AbstractContextManager] = get_db_context,
    ):
        self.gateway = gateway
        self.sessions = sessions
        self.engine = engine
        self.session_factory = session_factory
        # Commands run one after another, never interleaved at await points
        self._lock = asyncio.Lock()
        self._handlers: Dict[str, Tuple[Type[BaseModel], Handler]] = {
            constants.CMD_JOIN_ROOM: (JoinRoomCommand, self._join_room),
            constants.CMD_SET_ADMIN: (SetAdminCommand, self._set_admin),
            constants.CMD_START_VOTE: (StartVoteCommand, self._start_vote),
            constants.CMD_SUBMIT_VOTE: (SubmitVoteCommand, self._submit_vote),
            constants.CMD_REVEAL_VOTES: (RevealVotesCommand, self._reveal_votes),
        }

    @property
    def commands(self) -> Tuple[str, ...]:
        return tuple(self._handlers)

    async def dispatch(self, sid: str, event: str, payload: Any) -> bool:
        """
        Run a single command to completion.

        Returns:
            True if the command succeeded, False if an ``error`` event was sent
        """
        structlog.contextvars.bind_contextvars(sid=sid, event=event)
        try:
            async with self._lock:
                return await self._dispatch(sid, event, payload)
        finally:
            structlog.contextvars.unbind_contextvars("sid", "event")

    async def _dispatch(self, sid: str, event: str, payload: Any) -> bool:
        entry = self._handlers.get(event)
        if entry is None:
            logger.warning("unknown_command")
            await self._fail(sid, f"Unknown command: {event}")
            return False

        schema, handler = entry
        if not isinstance(payload, dict):
            await self._fail(sid, "Payload must be an object")
            return False

        try:
            command = schema.model_validate(payload)
        except pydantic.ValidationError as e:
            message = describe_validation_errors(e.errors())
            logger.info("command_rejected", reason=message)
            await self._fail(sid, message)
            return False

        try:
            with self.session_factory() as db:
                await handler(db, sid, command)
        except PokerError as e:
            logger.info("command_failed", error=e.message, error_type=type(e).__name__)
            await self._fail(sid, e.message)
            return False
        except SQLAlchemyError as e:
            logger.error("command_store_failure", error=str(e))
            await self._fail(sid, "Database error")
            return False

        return True

    async def disconnect(self, sid: str) -> None:
        """Drop live presence for a closed connection."""
        async with self._lock:
            await self.sessions.leave(sid)

    async def _fail(self, sid: str, message: str) -> None:
        await self.gateway.emit_to_connection(sid, constants.EVT_ERROR, message)

    async def _join_room(self, db: Session, sid: str, command: JoinRoomCommand) -> None:
        await self.sessions.join(db, sid, command.user_id, command.room_id)

    async def _set_admin(self, db: Session, sid: str, command: SetAdminCommand) -> None:
        await self.sessions.set_admin(db, command.room_id, command.new_admin_id, command.requester_id)

    async def _start_vote(self, db: Session, sid: str, command: StartVoteCommand) -> None:
        await self.engine.start_vote(db, command.room_id, command.vote_name, command.admin_id)

    async def _submit_vote(self, db: Session, sid: str, command: SubmitVoteCommand) -> None:
        await self.engine.submit_vote(db, sid, command.vote_id, command.user_id, command.value)

    async def _reveal_votes(self, db: Session, sid: str, command: RevealVotesCommand) -> None:
        await self.engine.reveal_votes(db, command.vote_id, command.admin_id, command.room_id)
