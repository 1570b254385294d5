"""Data access helpers for the futsal booking service."""

from futsal_booking.repository import (
    booking_repository,
    facility_repository,
    kit_booking_repository,
    kit_repository,
    user_repository,
)

__all__ = [
    "booking_repository",
    "facility_repository",
    "kit_booking_repository",
    "kit_repository",
    "user_repository",
]
