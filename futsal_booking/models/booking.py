import enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Time,
    func,
    text,
)
from sqlalchemy.orm import relationship

from futsal_booking.core.database import Base, Identifier


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


# Bookings in these statuses hold their slot.
ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value)

_ACTIVE_STATUS_CLAUSE = text("status IN ('pending', 'confirmed')")


class Booking(Base):
    """A court reservation for one facility on one calendar day."""

    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_facility_date", "id_facility", "booking_date"),
        Index(
            "uq_bookings_active_slot",
            "id_facility",
            "booking_date",
            "start_time",
            unique=True,
            sqlite_where=_ACTIVE_STATUS_CLAUSE,
            postgresql_where=_ACTIVE_STATUS_CLAUSE,
        ),
        CheckConstraint("end_time > start_time", name="ck_bookings_time_range"),
    )

    id_booking = Column(Identifier, primary_key=True, index=True)
    id_user = Column(Identifier, ForeignKey("users.id_user"), nullable=False, index=True)
    id_facility = Column(Identifier, ForeignKey("facilities.id_facility"), nullable=False)
    booking_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(String(30), nullable=False, default=BookingStatus.PENDING.value)
    payment_status = Column(String(30), nullable=False, default=PaymentStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    user = relationship("User", lazy="joined")
    facility = relationship("Facility", lazy="joined")
    kit_rentals = relationship(
        "BookingKitRental",
        back_populates="booking",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            f"<Booking(id_booking={self.id_booking}, date={self.booking_date}, "
            f"start_time={self.start_time}, end_time={self.end_time}, status={self.status})>"
        )


class BookingKitRental(Base):
    """Kit line embedded in a booking. ``price`` is frozen at admission time."""

    __tablename__ = "booking_kit_rentals"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_booking_kit_rentals_quantity"),
    )

    id_booking_kit_rental = Column(Identifier, primary_key=True, index=True)
    id_booking = Column(
        Identifier,
        ForeignKey("bookings.id_booking", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    id_kit = Column(Identifier, ForeignKey("kits.id_kit"), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    booking = relationship("Booking", back_populates="kit_rentals")
    kit = relationship("Kit", lazy="joined")


__all__ = [
    "ACTIVE_BOOKING_STATUSES",
    "Booking",
    "BookingKitRental",
    "BookingStatus",
    "PaymentStatus",
]
