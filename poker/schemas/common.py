"""Common response schemas."""
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body produced by HTTPException, for documentation."""
    detail: str
