"""Room endpoints."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from poker.api.deps import get_db
from poker.core.config import settings
from poker.core.exceptions import PokerError
from poker.core.rate_limit import limiter, RATE_LIMITS
from poker.schemas import (
    ErrorResponse,
    RoomCreate,
    RoomCreateResponse,
    RoomJoin,
    RoomJoinResponse,
    RoomState,
    RoomSummary,
)
from poker.services.rooms import create_room_for_user, get_room, join_room, list_participants
from poker.services.votes import get_active_vote, list_vote_responses, serialize_vote

logger = logging.getLogger(__name__)
router = APIRouter()


def _http_error(e: PokerError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "",
    response_model=RoomCreateResponse,
    responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
@limiter.limit(RATE_LIMITS["create_room"])
async def create_room_endpoint(
    request: Request,
    body: RoomCreate,
    db: Session = Depends(get_db)
):
    """
    Create a room and make the caller its creator, admin and first participant.

    The user record is created or replaced (name and email) by id first. The
    room gets a fresh 3-digit code that no other room uses.

    Args:
        request: FastAPI Request (for rate limiting)
        body: RoomCreate with userId, roomName, userName, userEmail
        db: Database session (injected)

    Returns:
        RoomCreateResponse with room {id, name, adminId}

    Raises:
        HTTPException: 400 if a field is missing or blank
        HTTPException: 500 on database failure
        HTTPException: 503 if no room code is free

    Example:
        Request:
            POST /api/rooms
            {
                "userId": "u1",
                "roomName": "Sprint 1",
                "userName": "Alice",
                "userEmail": "alice@example.com"
            }

        Response (200):
            {
                "message": "Room created successfully",
                "room": {"id": "482", "name": "Sprint 1", "adminId": "u1"}
            }
    """
    try:
        room = create_room_for_user(db, body.user_id, body.user_email, body.user_name, body.room_name)
    except PokerError as e:
        raise _http_error(e)
    except SQLAlchemyError as e:
        logger.error(f"Database error creating room for user {body.user_id}: {e}")
        raise HTTPException(status_code=500, detail="Database error")

    logger.info(f"Room created: room_id={room.id}, creator_id={body.user_id}")
    summary = RoomSummary(id=room.id, name=room.name, admin_id=room.admin_id)
    return RoomCreateResponse(room=summary.to_wire())


@router.post(
    "/{room_id}/join",
    response_model=RoomJoinResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
@limiter.limit(RATE_LIMITS["join_room"])
async def join_room_endpoint(
    request: Request,
    room_id: str,
    body: RoomJoin,
    db: Session = Depends(get_db)
):
    """
    Join an existing room as a durable participant.

    Joining twice is harmless. The user's name and email are replaced by the
    values sent here.

    Raises:
        HTTPException: 400 if a field is missing or blank
        HTTPException: 404 if the room does not exist
        HTTPException: 500 on database failure
    """
    try:
        room = join_room(db, room_id, body.user_id, body.user_email, body.user_name)
    except PokerError as e:
        raise _http_error(e)
    except SQLAlchemyError as e:
        logger.error(f"Database error joining room {room_id}: {e}")
        raise HTTPException(status_code=500, detail="Database error")

    return RoomJoinResponse(room=room)


@router.get("/{room_id}", response_model=RoomState, responses={404: {"model": ErrorResponse}})
@limiter.limit(RATE_LIMITS["room_state"])
async def get_room_state_endpoint(
    request: Request,
    room_id: str,
    db: Session = Depends(get_db)
):
    """
    Full room snapshot for a client that just opened the room.

    Returns:
        RoomState with:
            - room: room row plus admin_name
            - participants: durable participants ordered by join time
            - currentVote: the active vote or null
            - voteResponses: responses to the active vote, with user_name

    Raises:
        HTTPException: 404 if the room does not exist

    Note:
        Response values of an unrevealed vote are included unless
        HIDE_UNREVEALED_VALUES is set, in which case they are null.
    """
    try:
        room = get_room(db, room_id)
        participants = list_participants(db, room_id)
        vote = get_active_vote(db, room_id)

        current_vote = None
        responses = []
        if vote:
            current_vote = serialize_vote(vote)
            hide = settings.HIDE_UNREVEALED_VALUES and not vote.is_revealed
            responses = list_vote_responses(db, vote.id, hide_values=hide)
    except PokerError as e:
        raise _http_error(e)
    except SQLAlchemyError as e:
        logger.error(f"Database error reading room {room_id}: {e}")
        raise HTTPException(status_code=500, detail="Database error")

    return RoomState(
        room=room,
        participants=participants,
        currentVote=current_vote,
        voteResponses=responses,
    )
