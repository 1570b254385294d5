from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, List, Optional, Protocol

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from futsal_booking.models.booking import ACTIVE_BOOKING_STATUSES
from futsal_booking.models.facility import Facility
from futsal_booking.repository import booking_repository, facility_repository
from futsal_booking.services.slot_calculator import TimeSlot, compute_slots


class _BookedRange(Protocol):
    start_time: time
    end_time: time
    status: str


@dataclass(frozen=True)
class AvailableSlot:
    start_time: time
    end_time: time
    is_available: bool
    price: Decimal


def _clock(value: time) -> str:
    return value.strftime("%H:%M")


def _status_value(value) -> str:
    return getattr(value, "value", value)


def bookings_overlap(existing: _BookedRange, start_time: time, end_time: time) -> bool:
    """True when an active booking intersects the half-open ``[start_time, end_time)``.

    Mirrors ``booking_repository.facility_has_active_booking_in_range`` for a
    single in-memory booking; adjacent ranges do not overlap.
    """

    if _status_value(existing.status) not in ACTIVE_BOOKING_STATUSES:
        return False
    return existing.start_time < end_time and existing.end_time > start_time


def mark_availability(
    slots: Iterable[TimeSlot],
    bookings: Iterable[_BookedRange],
) -> List[AvailableSlot]:
    """Flag slots whose exact ``HH:MM`` range is held by an active booking.

    This is a display-time check by string equality; admission relies on
    interval overlap instead.
    """

    taken = {
        (_clock(booking.start_time), _clock(booking.end_time))
        for booking in bookings
        if _status_value(booking.status) in ACTIVE_BOOKING_STATUSES
    }

    return [
        AvailableSlot(
            start_time=slot.start_time,
            end_time=slot.end_time,
            is_available=(_clock(slot.start_time), _clock(slot.end_time)) not in taken,
            price=slot.price,
        )
        for slot in slots
    ]


class AvailabilityService:
    def __init__(self, db: Session):
        self.db = db

    def _get_facility(self, facility_id: int) -> Facility:
        facility = facility_repository.get_facility(self.db, facility_id)
        if facility is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Facility not found",
            )
        return facility

    def list_available_slots(
        self,
        facility_id: int,
        *,
        target_date: date,
        now: Optional[datetime] = None,
    ) -> dict:
        facility = self._get_facility(facility_id)

        window = compute_slots(
            facility.opening_time,
            facility.closing_time,
            target_date,
            now or datetime.now(),
            price=facility.price_per_hour,
        )

        # The window may have rolled over to tomorrow; bookings follow it.
        bookings = booking_repository.list_active_bookings_for_date(
            self.db,
            facility_id=facility.id_facility,
            booking_date=window.slot_date,
        )

        return {
            "slot_date": window.slot_date,
            "slots": mark_availability(window, bookings),
        }


__all__ = ["AvailabilityService", "AvailableSlot", "bookings_overlap", "mark_availability"]
