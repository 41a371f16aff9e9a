"""Vote model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Boolean, Column, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from poker.db.base import Base


class Vote(Base):
    __tablename__ = "votes"

    id = Column(String(36), primary_key=True)
    room_id = Column(String(3), ForeignKey("rooms.id"), nullable=False)
    name = Column(String(200), nullable=False)
    started_by = Column(String(100), ForeignKey("users.id"), nullable=False)
    started_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    revealed_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    room = relationship("Room", back_populates="votes")
    starter = relationship("User", foreign_keys=[started_by])
    responses = relationship("VoteResponse", back_populates="vote")

    __table_args__ = (
        Index("idx_votes_room_active", "room_id", "is_active"),
    )

    @property
    def is_revealed(self) -> bool:
        return self.revealed_at is not None
