"""
Transport-independent fan-out primitives.

The session manager, vote engine and dispatcher only talk to a ``Gateway``:
per-connection unicast plus room-scoped broadcast groups. ``SocketIOGateway``
maps these onto python-socketio rooms; ``InMemoryGateway`` keeps everything in
dictionaries and records what each connection would have received.
"""
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Dict, List, Optional, Set, Tuple

import socketio


class Gateway(ABC):
    """Bidirectional channel abstraction used by the realtime core."""

    @abstractmethod
    async def join_group(self, sid: str, room_id: str) -> None:
        ...

    @abstractmethod
    async def leave_group(self, sid: str, room_id: str) -> None:
        ...

    @abstractmethod
    async def emit_to_connection(self, sid: str, event: str, payload: Any) -> None:
        ...

    @abstractmethod
    async def emit_to_group_except(self, room_id: str, excluded_sid: Optional[str], event: str, payload: Any) -> None:
        ...

    async def emit_to_group(self, room_id: str, event: str, payload: Any) -> None:
        await self.emit_to_group_except(room_id, None, event, payload)


class SocketIOGateway(Gateway):
    """Gateway backed by a python-socketio ``AsyncServer``."""

    def __init__(self, sio: socketio.AsyncServer):
        self.sio = sio

    async def join_group(self, sid: str, room_id: str) -> None:
        await self.sio.enter_room(sid, room_id)

    async def leave_group(self, sid: str, room_id: str) -> None:
        await self.sio.leave_room(sid, room_id)

    async def emit_to_connection(self, sid: str, event: str, payload: Any) -> None:
        await self.sio.emit(event, payload, to=sid)

    async def emit_to_group_except(self, room_id: str, excluded_sid: Optional[str], event: str, payload: Any) -> None:
        await self.sio.emit(event, payload, room=room_id, skip_sid=excluded_sid)


class InMemoryGateway(Gateway):
    """
    Gateway that delivers into per-connection inboxes.

    Useful for tests and for driving the core without a network transport.
    """

    def __init__(self):
        self.groups: Dict[str, Set[str]] = defaultdict(set)
        self.inboxes: Dict[str, List[Tuple[str, Any]]] = defaultdict(list)

    async def join_group(self, sid: str, room_id: str) -> None:
        self.groups[room_id].add(sid)

    async def leave_group(self, sid: str, room_id: str) -> None:
        members = self.groups.get(room_id)
        if members is None:
            return
        members.discard(sid)
        if not members:
            del self.groups[room_id]

    async def emit_to_connection(self, sid: str, event: str, payload: Any) -> None:
        self.inboxes[sid].append((event, payload))

    async def emit_to_group_except(self, room_id: str, excluded_sid: Optional[str], event: str, payload: Any) -> None:
        for sid in sorted(self.groups.get(room_id, ())):
            if sid != excluded_sid:
                self.inboxes[sid].append((event, payload))

    def received(self, sid: str, event: Optional[str] = None) -> List[Any]:
        """Payloads delivered to ``sid``, optionally filtered by event name."""
        return [
            payload for name, payload in self.inboxes.get(sid, [])
            if event is None or name == event
        ]

    def events(self, sid: str) -> List[str]:
        """Event names delivered to ``sid`` in order."""
        return [name for name, _ in self.inboxes.get(sid, [])]

    def clear(self) -> None:
        self.inboxes.clear()
