import enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from futsal_booking.core.database import Base, Identifier


class KitType(str, enum.Enum):
    JERSEY = "Jersey"
    SHORTS = "Shorts"
    SHOES = "Shoes"
    SOCKS = "Socks"
    ACCESSORIES = "Accessories"


class Kit(Base):
    """Rentable equipment tied to a facility. ``quantity`` is the live stock."""

    __tablename__ = "kits"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_kits_quantity_non_negative"),
    )

    id_kit = Column(Identifier, primary_key=True, index=True)
    id_facility = Column(
        Identifier,
        ForeignKey("facilities.id_facility", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(30), nullable=False, default=KitType.JERSEY.value)
    price = Column(Numeric(10, 2), nullable=False)
    size = Column(String(30), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    facility = relationship("Facility", back_populates="kits")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            f"<Kit(id_kit={self.id_kit}, name={self.name}, "
            f"quantity={self.quantity})>"
        )


__all__ = ["Kit", "KitType"]
