"""Vote schemas."""
from typing import List, Optional
from pydantic import BaseModel


class VoteDetail(BaseModel):
    id: str
    room_id: str
    name: str
    started_by: str
    started_by_name: Optional[str] = None
    started_at: Optional[str] = None
    revealed_at: Optional[str] = None
    is_active: bool


class VoteResponseDetail(BaseModel):
    vote_id: str
    user_id: str
    value: Optional[str] = None  # None while hidden
    submitted_at: Optional[str] = None
    user_name: str


class EstimatesResponse(BaseModel):
    values: List[str]
