from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    event,
    func,
)
from sqlalchemy.orm import relationship

from futsal_booking.core.database import Base, Identifier
from futsal_booking.models.booking import BookingStatus


class KitBooking(Base):
    """Kit rentals attached to an existing booking after it was created."""

    __tablename__ = "kit_bookings"

    id_kit_booking = Column(Identifier, primary_key=True, index=True)
    id_user = Column(Identifier, ForeignKey("users.id_user"), nullable=False, index=True)
    id_facility = Column(
        Identifier, ForeignKey("facilities.id_facility"), nullable=False, index=True
    )
    id_booking = Column(
        Identifier, ForeignKey("bookings.id_booking"), nullable=False, index=True
    )
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(String(30), nullable=False, default=BookingStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    user = relationship("User", lazy="joined")
    facility = relationship("Facility", lazy="joined")
    booking = relationship("Booking", lazy="joined")
    items = relationship(
        "KitBookingItem",
        back_populates="kit_booking",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def recalculate_total(self) -> Decimal:
        total = sum(
            (Decimal(item.price) * item.quantity for item in self.items),
            Decimal("0"),
        )
        self.total_amount = total
        return total

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            f"<KitBooking(id_kit_booking={self.id_kit_booking}, "
            f"id_booking={self.id_booking}, status={self.status})>"
        )


class KitBookingItem(Base):
    """Single kit line of a kit booking; ``price`` is the unit price."""

    __tablename__ = "kit_booking_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_kit_booking_items_quantity"),
    )

    id_kit_booking_item = Column(Identifier, primary_key=True, index=True)
    id_kit_booking = Column(
        Identifier,
        ForeignKey("kit_bookings.id_kit_booking", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    id_kit = Column(Identifier, ForeignKey("kits.id_kit"), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    kit_booking = relationship("KitBooking", back_populates="items")
    kit = relationship("Kit", lazy="joined")


@event.listens_for(KitBooking, "before_insert")
@event.listens_for(KitBooking, "before_update")
def _refresh_total_amount(mapper, connection, target: KitBooking) -> None:
    target.recalculate_total()


__all__ = ["KitBooking", "KitBookingItem"]
