"""Room membership model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from poker.db.base import Base


class RoomParticipant(Base):
    __tablename__ = "room_participants"

    # Surrogate key keeps insertion order as a tie-breaker for equal joined_at
    id = Column(Integer, primary_key=True, autoincrement=True)
    room_id = Column(String(3), ForeignKey("rooms.id"), nullable=False)
    user_id = Column(String(100), ForeignKey("users.id"), nullable=False)
    joined_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    room = relationship("Room", back_populates="participants")
    user = relationship("User")

    __table_args__ = (
        Index("idx_room_participants_room", "room_id"),
        UniqueConstraint("room_id", "user_id", name="uq_room_user"),
    )
