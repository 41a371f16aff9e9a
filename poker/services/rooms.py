"""Room and membership business logic."""
import logging
from typing import Dict, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from poker.db.models import Room, RoomParticipant, User
from poker.core.config import settings
from poker.core.exceptions import ConflictError, NotFoundError, RoomCodeExhaustedError
from poker.core.utils import isoformat, make_room_code
from poker.services.users import upsert_user

logger = logging.getLogger(__name__)


def serialize_room(room: Room) -> Dict:
    """Room row as sent to clients, including the admin's display name."""
    return {
        "id": room.id,
        "name": room.name,
        "creator_id": room.creator_id,
        "admin_id": room.admin_id,
        "admin_name": room.admin.name if room.admin else None,
        "created_at": isoformat(room.created_at),
    }


def room_exists(db: Session, room_id: str) -> bool:
    return db.query(Room.id).filter(Room.id == room_id).first() is not None


def get_room_record(db: Session, room_id: str) -> Optional[Room]:
    """Get the Room ORM object, or None."""
    return db.query(Room).filter(Room.id == room_id).first()


def get_room(db: Session, room_id: str) -> Dict:
    """Get a room with its admin's name. Raises NotFoundError if absent."""
    room = get_room_record(db, room_id)
    if not room:
        raise NotFoundError("Room not found")
    return serialize_room(room)


def generate_unique_room_code(db: Session, max_attempts: Optional[int] = None) -> str:
    """
    Pick a 3-digit room code that no existing room uses.

    Raises:
        RoomCodeExhaustedError: if every attempt collided
    """
    attempts = max_attempts or settings.ROOM_CODE_MAX_ATTEMPTS
    for _ in range(attempts):
        code = make_room_code()
        if not room_exists(db, code):
            return code

    logger.warning(f"No free room code after {attempts} attempts")
    raise RoomCodeExhaustedError("No free room code available, please try again later")


def create_room(db: Session, room_id: str, name: str, creator_id: str) -> Room:
    """
    Create a room owned and administered by ``creator_id``.

    The creator is added as the first participant in the same transaction.

    Raises:
        ConflictError: if ``room_id`` is already taken
    """
    if room_exists(db, room_id):
        raise ConflictError("Room already exists")

    room = Room(id=room_id, name=name, creator_id=creator_id, admin_id=creator_id)
    db.add(room)
    db.add(RoomParticipant(room_id=room_id, user_id=creator_id))

    try:
        db.commit()
    except IntegrityError:
        # Lost a race for the same code
        db.rollback()
        raise ConflictError("Room already exists")
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(room)
    return room


def create_room_for_user(
    db: Session,
    user_id: str,
    user_email: str,
    user_name: str,
    room_name: str,
) -> Room:
    """Upsert the creator, then create a room under a fresh unique code."""
    upsert_user(db, user_id, user_email, user_name)

    for _ in range(settings.ROOM_CODE_MAX_ATTEMPTS):
        room_id = generate_unique_room_code(db)
        try:
            return create_room(db, room_id, room_name, user_id)
        except ConflictError:
            continue

    raise RoomCodeExhaustedError("No free room code available, please try again later")


def add_membership(db: Session, room_id: str, user_id: str) -> None:
    """Record that a user belongs to a room. Idempotent."""
    existing = db.query(RoomParticipant).filter(
        RoomParticipant.room_id == room_id,
        RoomParticipant.user_id == user_id
    ).first()
    if existing:
        return

    db.add(RoomParticipant(room_id=room_id, user_id=user_id))
    try:
        db.commit()
    except IntegrityError:
        # Concurrent join of the same pair; the row exists either way
        db.rollback()
    except SQLAlchemyError:
        db.rollback()
        raise


def join_room(db: Session, room_id: str, user_id: str, user_email: str, user_name: str) -> Dict:
    """Upsert the user and add them to an existing room."""
    upsert_user(db, user_id, user_email, user_name)

    room = get_room_record(db, room_id)
    if not room:
        raise NotFoundError("Room not found")

    add_membership(db, room_id, user_id)
    return serialize_room(room)


def list_participants(db: Session, room_id: str) -> List[Dict]:
    """All durable participants of a room, earliest joiner first."""
    rows = db.query(User, RoomParticipant.joined_at).join(
        RoomParticipant, RoomParticipant.user_id == User.id
    ).filter(
        RoomParticipant.room_id == room_id
    ).order_by(
        RoomParticipant.joined_at, RoomParticipant.id
    ).all()

    return [
        {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "joined_at": isoformat(joined_at),
        }
        for user, joined_at in rows
    ]


def find_room_administered_by(db: Session, room_id: str, requester_id: str) -> Optional[Room]:
    """The room if ``requester_id`` is its admin or its creator, else None."""
    return db.query(Room).filter(
        Room.id == room_id,
        or_(Room.admin_id == requester_id, Room.creator_id == requester_id)
    ).first()


def find_room_with_admin(db: Session, room_id: str, admin_id: str) -> Optional[Room]:
    """The room if ``admin_id`` is its current admin, else None."""
    return db.query(Room).filter(
        Room.id == room_id,
        Room.admin_id == admin_id
    ).first()


def set_admin(db: Session, room_id: str, new_admin_id: str) -> None:
    """Change a room's admin. The caller is responsible for authorization."""
    db.query(Room).filter(Room.id == room_id).update(
        {Room.admin_id: new_admin_id}, synchronize_session="fetch"
    )
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
