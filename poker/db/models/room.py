"""Room model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from poker.db.base import Base


class Room(Base):
    __tablename__ = "rooms"

    id = Column(String(3), primary_key=True)  # 3-digit shareable code
    name = Column(String(100), nullable=False)
    creator_id = Column(String(100), ForeignKey("users.id"), nullable=False)
    admin_id = Column(String(100), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    admin = relationship("User", foreign_keys=[admin_id])
    participants = relationship("RoomParticipant", back_populates="room")
    votes = relationship("Vote", back_populates="room")
