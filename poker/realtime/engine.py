"""Vote state machine for a room's single vote slot.

Idle (no vote yet) -> Collecting (active, not revealed) -> Revealed.
Starting another vote supersedes whatever was active; the superseded vote
keeps its responses and reveal timestamp in the database.
"""
from typing import Dict, Optional

from sqlalchemy.orm import Session

from poker.core.constants import EVT_VOTE_STARTED, EVT_VOTE_SUBMITTED, EVT_VOTES_REVEALED
from poker.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from poker.core.logging_config import get_logger
from poker.core.sanitization import sanitize_vote_name, validate_estimate
from poker.realtime.gateway import Gateway
from poker.services import rooms as room_service
from poker.services import votes as vote_service

logger = get_logger(__name__)


class VoteEngine:
    """
    Starts, collects and reveals votes, and fans the results out.

    Args:
        gateway: Where events are delivered
        allow_votes_after_reveal: Accept submissions to an already revealed
            vote (they overwrite silently)
        strict_estimates: Reject values outside the estimation domain
    """

    def __init__(self, gateway: Gateway, allow_votes_after_reveal: bool = True, strict_estimates: bool = False):
        self.gateway = gateway
        self.allow_votes_after_reveal = allow_votes_after_reveal
        self.strict_estimates = strict_estimates

    async def start_vote(self, db: Session, room_id: str, vote_name: str, admin_id: str) -> Dict:
        """Start a new round. Only the room's current admin may do this."""
        if not room_service.find_room_with_admin(db, room_id, admin_id):
            raise UnauthorizedError("Not authorized to start vote")

        name = sanitize_vote_name(vote_name)
        vote = vote_service.create_vote(db, room_id, name, admin_id)

        payload = {"id": vote.id, "name": vote.name, "startedBy": admin_id}
        await self.gateway.emit_to_group(room_id, EVT_VOTE_STARTED, payload)

        logger.info("vote_started", room_id=room_id, vote_id=vote.id, admin_id=admin_id)
        return payload

    async def submit_vote(self, db: Session, sid: Optional[str], vote_id: str, user_id: str, value: str) -> None:
        """
        Record an estimate and tell the room who voted, never what.

        The submitter's own connection is skipped.
        """
        vote = vote_service.get_vote(db, vote_id)
        if not vote:
            raise NotFoundError("Vote not found")

        if vote.is_revealed and not self.allow_votes_after_reveal:
            raise ConflictError("Votes have already been revealed")

        value = validate_estimate(value, strict=self.strict_estimates)
        vote_service.upsert_vote_response(db, vote_id, user_id, value)

        await self.gateway.emit_to_group_except(vote.room_id, sid, EVT_VOTE_SUBMITTED, {"userId": user_id})

        logger.info("vote_submitted", room_id=vote.room_id, vote_id=vote_id, user_id=user_id)

    async def reveal_votes(self, db: Session, vote_id: str, admin_id: str, room_id: str) -> Dict:
        """Reveal every response to the whole room. Admin only."""
        if not room_service.find_room_with_admin(db, room_id, admin_id):
            raise UnauthorizedError("Not authorized to reveal votes")

        # Only admin rights on room_id are checked, not that the vote belongs to it
        vote_service.reveal_vote(db, vote_id)
        responses = vote_service.list_vote_responses(db, vote_id)

        payload = {"voteId": vote_id, "responses": responses}
        await self.gateway.emit_to_group(room_id, EVT_VOTES_REVEALED, payload)

        logger.info("votes_revealed", room_id=room_id, vote_id=vote_id, responses=len(responses))
        return payload
