"""Estimation domain endpoint."""
from fastapi import APIRouter

from poker.core.constants import ESTIMATION_VALUES
from poker.schemas import EstimatesResponse

router = APIRouter()


@router.get("/estimates", response_model=EstimatesResponse)
async def get_estimates():
    """The card values clients should offer. Advisory unless strict mode is on."""
    return EstimatesResponse(values=list(ESTIMATION_VALUES))
