"""Room schemas."""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from poker.core.sanitization import (
    sanitize_display_name,
    sanitize_email,
    sanitize_room_name,
    validate_identifier,
)
from poker.schemas.vote import VoteDetail, VoteResponseDetail


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoomJoin(_CamelModel):
    user_id: str = Field(..., min_length=1)
    user_name: str = Field(..., min_length=1)
    user_email: str = Field(..., min_length=1)

    @field_validator('user_id')
    @classmethod
    def validate_user_id_field(cls, v: str) -> str:
        return validate_identifier(v)

    @field_validator('user_name')
    @classmethod
    def sanitize_user_name_field(cls, v: str) -> str:
        return sanitize_display_name(v)

    @field_validator('user_email')
    @classmethod
    def sanitize_user_email_field(cls, v: str) -> str:
        return sanitize_email(v)


class RoomCreate(RoomJoin):
    room_name: str = Field(..., min_length=1)

    @field_validator('room_name')
    @classmethod
    def sanitize_room_name_field(cls, v: str) -> str:
        """Sanitize and validate room name."""
        return sanitize_room_name(v)


class RoomSummary(_CamelModel):
    """Short room view returned right after creation."""
    id: str
    name: str
    admin_id: str

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class RoomCreateResponse(BaseModel):
    message: str = "Room created successfully"
    room: dict


class RoomDetail(BaseModel):
    id: str
    name: str
    creator_id: str
    admin_id: str
    admin_name: Optional[str] = None
    created_at: Optional[str] = None


class RoomJoinResponse(BaseModel):
    message: str = "Joined room successfully"
    room: RoomDetail


class Participant(BaseModel):
    id: str
    name: str
    email: str
    joined_at: Optional[str] = None


class RoomState(BaseModel):
    room: RoomDetail
    participants: List[Participant]
    currentVote: Optional[VoteDetail] = None
    voteResponses: List[VoteResponseDetail] = []
