"""User model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, String, DateTime

from poker.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(100), primary_key=True)
    email = Column(String(254), nullable=False)  # Contact address only, not unique
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    def to_profile(self) -> dict:
        """Public profile sent with user-joined / user-left events."""
        return {"id": self.id, "name": self.name, "email": self.email}
