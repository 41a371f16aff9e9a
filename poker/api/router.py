"""Main API router."""
from fastapi import APIRouter

from poker.api.endpoints import rooms, estimates

api_router = APIRouter(prefix="/api")

api_router.include_router(rooms.router, prefix="/rooms", tags=["Rooms"])
api_router.include_router(estimates.router, tags=["Estimates"])
