"""SQLAlchemy models for the futsal booking service."""
from futsal_booking.models.user import User, UserRole
from futsal_booking.models.facility import Facility
from futsal_booking.models.kit import Kit, KitType
from futsal_booking.models.booking import (
    ACTIVE_BOOKING_STATUSES,
    Booking,
    BookingKitRental,
    BookingStatus,
    PaymentStatus,
)
from futsal_booking.models.kit_booking import KitBooking, KitBookingItem

__all__ = [
    "ACTIVE_BOOKING_STATUSES",
    "Booking",
    "BookingKitRental",
    "BookingStatus",
    "Facility",
    "Kit",
    "KitBooking",
    "KitBookingItem",
    "KitType",
    "PaymentStatus",
    "User",
    "UserRole",
]
