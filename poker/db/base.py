"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here so create_all() sees them
from poker.db.models.user import User  # noqa: F401, E402
from poker.db.models.room import Room  # noqa: F401, E402
from poker.db.models.membership import RoomParticipant  # noqa: F401, E402
from poker.db.models.vote import Vote  # noqa: F401, E402
from poker.db.models.vote_response import VoteResponse  # noqa: F401, E402
