"""VoteResponse model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, PrimaryKeyConstraint
from sqlalchemy.orm import relationship

from poker.db.base import Base


class VoteResponse(Base):
    __tablename__ = "vote_responses"

    vote_id = Column(String(36), ForeignKey("votes.id"), nullable=False)
    user_id = Column(String(100), ForeignKey("users.id"), nullable=False)
    value = Column(String(10), nullable=False)
    submitted_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    vote = relationship("Vote", back_populates="responses")
    user = relationship("User")

    __table_args__ = (
        PrimaryKeyConstraint("vote_id", "user_id", name="pk_vote_user"),
        Index("idx_vote_responses_vote", "vote_id"),
    )
