"""General utility functions."""
import random
import uuid
from datetime import datetime, timezone

from poker.core.constants import ROOM_CODE_MIN, ROOM_CODE_MAX


def make_room_code() -> str:
    """Generate a candidate 3-digit room code (100-999)."""
    return str(random.randint(ROOM_CODE_MIN, ROOM_CODE_MAX))


def make_vote_id() -> str:
    """Generate an opaque vote identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC timezone."""
    if dt.tzinfo is None:
        # SQLite hands back naive datetimes; they were stored as UTC
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def isoformat(dt):
    """ISO 8601 string for a datetime, or None."""
    if dt is None:
        return None
    return to_utc(dt).isoformat()
