"""Inbound realtime command payloads.

Field names are snake_case in Python and camelCase on the wire.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from poker.core.sanitization import validate_room_code


class _Command(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,  # Clients send room codes and estimates as numbers
        str_strip_whitespace=True,
    )


class JoinRoomCommand(_Command):
    user_id: str = Field(..., min_length=1)
    room_id: str = Field(..., min_length=1)

    @field_validator("room_id")
    @classmethod
    def validate_room_id_field(cls, v: str) -> str:
        return validate_room_code(v)


class SetAdminCommand(_Command):
    room_id: str = Field(..., min_length=1)
    new_admin_id: str = Field(..., min_length=1)
    requester_id: str = Field(..., min_length=1)


class StartVoteCommand(_Command):
    room_id: str = Field(..., min_length=1)
    vote_name: str = Field(..., min_length=1)
    admin_id: str = Field(..., min_length=1)


class SubmitVoteCommand(_Command):
    vote_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)


class RevealVotesCommand(_Command):
    vote_id: str = Field(..., min_length=1)
    admin_id: str = Field(..., min_length=1)
    room_id: str = Field(..., min_length=1)
