"""SQLAlchemy model mapping to the users table owned by the auth service."""

import enum

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from futsal_booking.core.database import Base, Identifier


class UserRole(str, enum.Enum):
    PLAYER = "player"
    FUTSAL_OWNER = "futsal_owner"


class User(Base):
    """Represents a user registered through the authentication service."""

    __tablename__ = "users"

    id_user = Column(Identifier, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(20), nullable=True)
    role = Column(String(30), nullable=False, default=UserRole.PLAYER.value)
    status = Column(String(30), nullable=False, default="active")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User(id_user={self.id_user}, email={self.email}, role={self.role})>"
