from datetime import time

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    Time,
    func,
)
from sqlalchemy.orm import relationship

from futsal_booking.core.database import Base, Identifier


class Facility(Base):
    """A futsal court that can be booked by the hour."""

    __tablename__ = "facilities"

    id_facility = Column(Identifier, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(300), nullable=False)
    price_per_hour = Column(Numeric(10, 2), nullable=False)
    opening_time = Column(Time, nullable=False, default=time(8, 0))
    closing_time = Column(Time, nullable=False, default=time(22, 0))
    is_available = Column(Boolean, nullable=False, default=True)
    id_owner = Column(Identifier, ForeignKey("users.id_user"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    owner = relationship("User", lazy="joined")
    kits = relationship("Kit", back_populates="facility", cascade="all, delete-orphan")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Facility(id_facility={self.id_facility}, name={self.name})>"


__all__ = ["Facility"]
