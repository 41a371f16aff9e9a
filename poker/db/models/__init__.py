"""Database models."""
from poker.db.models.user import User
from poker.db.models.room import Room
from poker.db.models.membership import RoomParticipant
from poker.db.models.vote import Vote
from poker.db.models.vote_response import VoteResponse

__all__ = ["User", "Room", "RoomParticipant", "Vote", "VoteResponse"]
