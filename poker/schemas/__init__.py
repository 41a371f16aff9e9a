"""Pydantic schemas for request/response and realtime command validation."""
from poker.schemas.room import (
    RoomCreate,
    RoomJoin,
    RoomSummary,
    RoomCreateResponse,
    RoomDetail,
    RoomJoinResponse,
    Participant,
    RoomState,
)
from poker.schemas.vote import VoteDetail, VoteResponseDetail, EstimatesResponse
from poker.schemas.events import (
    JoinRoomCommand,
    SetAdminCommand,
    StartVoteCommand,
    SubmitVoteCommand,
    RevealVotesCommand,
)
from poker.schemas.common import ErrorResponse

__all__ = [
    "RoomCreate",
    "RoomJoin",
    "RoomSummary",
    "RoomCreateResponse",
    "RoomDetail",
    "RoomJoinResponse",
    "Participant",
    "RoomState",
    "VoteDetail",
    "VoteResponseDetail",
    "EstimatesResponse",
    "JoinRoomCommand",
    "SetAdminCommand",
    "StartVoteCommand",
    "SubmitVoteCommand",
    "RevealVotesCommand",
    "ErrorResponse",
]
