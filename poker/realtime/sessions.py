"""Live presence: which connection is in which room, as whom."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from poker.core.constants import EVT_ADMIN_CHANGED, EVT_ROOM_JOINED, EVT_USER_JOINED, EVT_USER_LEFT
from poker.core.exceptions import NotFoundError, UnauthorizedError
from poker.core.logging_config import get_logger
from poker.realtime.gateway import Gateway
from poker.services import rooms as room_service
from poker.services.users import get_user

logger = get_logger(__name__)


@dataclass
class Connection:
    """A transport connection that has joined a room."""

    sid: str
    user_id: str
    room_id: str
    user: Dict = field(default_factory=dict)  # Profile snapshot taken at join time


class RoomSessionManager:
    """
    Owns the live connection table for one server.

    Durable membership lives in the database; this only tracks who is
    connected right now and is forgotten on disconnect.
    """

    def __init__(self, gateway: Gateway):
        self.gateway = gateway
        self._connections: Dict[str, Connection] = {}

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def get_connection(self, sid: str) -> Optional[Connection]:
        return self._connections.get(sid)

    def connections_in_room(self, room_id: str) -> List[Connection]:
        return [c for c in self._connections.values() if c.room_id == room_id]

    def online_user_ids(self, room_id: str) -> List[str]:
        """Distinct user ids with at least one live connection in the room."""
        seen = []
        for connection in self.connections_in_room(room_id):
            if connection.user_id not in seen:
                seen.append(connection.user_id)
        return seen

    async def join(self, db: Session, sid: str, user_id: str, room_id: str) -> Connection:
        """
        Attach a connection to a room's broadcast group.

        Raises:
            NotFoundError: if the user has never been created
        """
        user = get_user(db, user_id)
        if not user:
            raise NotFoundError("User not found")

        previous = self._connections.get(sid)
        if previous is not None and previous.room_id != room_id:
            await self._detach(previous)

        await self.gateway.join_group(sid, room_id)
        connection = Connection(sid=sid, user_id=user_id, room_id=room_id, user=user.to_profile())
        self._connections[sid] = connection

        await self.gateway.emit_to_group_except(room_id, sid, EVT_USER_JOINED, connection.user)
        await self.gateway.emit_to_connection(sid, EVT_ROOM_JOINED, {"roomId": room_id})

        logger.info("user_joined_room", user_id=user_id, room_id=room_id)
        return connection

    async def leave(self, sid: str) -> Optional[Connection]:
        """Forget a connection (called on disconnect). Unknown sids are ignored."""
        connection = self._connections.get(sid)
        if connection is None:
            return None

        await self._detach(connection)
        logger.info("user_left_room", user_id=connection.user_id, room_id=connection.room_id)
        return connection

    async def _detach(self, connection: Connection) -> None:
        self._connections.pop(connection.sid, None)
        await self.gateway.leave_group(connection.sid, connection.room_id)
        await self.gateway.emit_to_group_except(
            connection.room_id, connection.sid, EVT_USER_LEFT, connection.user
        )

    async def set_admin(self, db: Session, room_id: str, new_admin_id: str, requester_id: str) -> None:
        """
        Hand the admin role to another user.

        Only the room's creator or its current admin may do this.

        Raises:
            UnauthorizedError: requester is neither creator nor admin, or the
                room does not exist
        """
        room = room_service.find_room_administered_by(db, room_id, requester_id)
        if not room:
            raise UnauthorizedError("Not authorized to set admin")

        room_service.set_admin(db, room_id, new_admin_id)
        await self.gateway.emit_to_group(room_id, EVT_ADMIN_CHANGED, {"newAdminId": new_admin_id})

        logger.info("admin_changed", room_id=room_id, new_admin_id=new_admin_id, requester_id=requester_id)
