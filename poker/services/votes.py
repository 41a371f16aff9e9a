"""Vote and vote-response business logic.

A room has a single vote slot: starting a vote deactivates whatever was
active before it. Older votes keep their responses and reveal timestamp but
are never returned by ``get_active_vote`` again.
"""
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from poker.db.models import User, Vote, VoteResponse
from poker.core.utils import isoformat, make_vote_id, utcnow


def serialize_vote(vote: Vote) -> Dict:
    return {
        "id": vote.id,
        "room_id": vote.room_id,
        "name": vote.name,
        "started_by": vote.started_by,
        "started_by_name": vote.starter.name if vote.starter else None,
        "started_at": isoformat(vote.started_at),
        "revealed_at": isoformat(vote.revealed_at),
        "is_active": bool(vote.is_active),
    }


def get_vote(db: Session, vote_id: str) -> Optional[Vote]:
    """Get a vote by id."""
    return db.query(Vote).filter(Vote.id == vote_id).first()


def get_active_vote(db: Session, room_id: str) -> Optional[Vote]:
    """The room's active vote (most recently started), or None."""
    return db.query(Vote).filter(
        Vote.room_id == room_id,
        Vote.is_active.is_(True)
    ).order_by(Vote.started_at.desc()).first()


def create_vote(db: Session, room_id: str, name: str, started_by: str) -> Vote:
    """
    Start a new vote in a room.

    Any active vote is deactivated first. Both writes are committed together
    so no observer sees two active votes or a half-finished switch.
    """
    db.query(Vote).filter(
        Vote.room_id == room_id,
        Vote.is_active.is_(True)
    ).update({Vote.is_active: False}, synchronize_session="fetch")

    vote = Vote(
        id=make_vote_id(),
        room_id=room_id,
        name=name,
        started_by=started_by,
        started_at=utcnow(),
        revealed_at=None,
        is_active=True,
    )
    db.add(vote)

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(vote)
    return vote


def upsert_vote_response(db: Session, vote_id: str, user_id: str, value: str) -> VoteResponse:
    """
    Record a user's estimate, silently replacing any earlier one.

    Raises:
        SQLAlchemyError: if the write fails, including an unknown vote or
            user id where foreign keys are enforced
    """
    response = db.query(VoteResponse).filter(
        VoteResponse.vote_id == vote_id,
        VoteResponse.user_id == user_id
    ).first()

    if response is None:
        response = VoteResponse(vote_id=vote_id, user_id=user_id, value=value, submitted_at=utcnow())
        db.add(response)
    else:
        response.value = value
        response.submitted_at = utcnow()

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    return response


def reveal_vote(db: Session, vote_id: str) -> None:
    """Stamp revealed_at with the current time. Unknown ids are a no-op."""
    db.query(Vote).filter(Vote.id == vote_id).update(
        {Vote.revealed_at: utcnow()}, synchronize_session="fetch"
    )
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def list_vote_responses(db: Session, vote_id: str, hide_values: bool = False) -> List[Dict]:
    """
    All responses for a vote, each annotated with the submitter's name.

    Args:
        db: Database session
        vote_id: Vote to list
        hide_values: Replace every value with None (used while a vote is
            still collecting)

    Returns:
        List of dicts with vote_id, user_id, value, submitted_at, user_name
    """
    rows = db.query(VoteResponse, User.name).join(
        User, VoteResponse.user_id == User.id
    ).filter(
        VoteResponse.vote_id == vote_id
    ).order_by(VoteResponse.submitted_at).all()

    return [
        {
            "vote_id": response.vote_id,
            "user_id": response.user_id,
            "value": None if hide_values else response.value,
            "submitted_at": isoformat(response.submitted_at),
            "user_name": user_name,
        }
        for response, user_name in rows
    ]
