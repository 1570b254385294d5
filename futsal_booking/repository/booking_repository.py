from __future__ import annotations

from datetime import date, time
from typing import List, Optional, Sequence

from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload, selectinload

from futsal_booking.models.booking import (
    ACTIVE_BOOKING_STATUSES,
    Booking,
    BookingKitRental,
    BookingStatus,
)
from futsal_booking.models.facility import Facility


def _with_details(query):
    return query.options(
        joinedload(Booking.facility),
        joinedload(Booking.user),
        selectinload(Booking.kit_rentals).joinedload(BookingKitRental.kit),
    )


def list_bookings(
    db: Session,
    *,
    user_id: Optional[int] = None,
    facility_id: Optional[int] = None,
    owner_id: Optional[int] = None,
    status_filter: Optional[str] = None,
) -> List[Booking]:
    query = _with_details(db.query(Booking))

    if owner_id is not None:
        query = query.join(Facility, Facility.id_facility == Booking.id_facility).filter(
            Facility.id_owner == owner_id
        )
    if user_id is not None:
        query = query.filter(Booking.id_user == user_id)
    if facility_id is not None:
        query = query.filter(Booking.id_facility == facility_id)
    if status_filter is not None:
        query = query.filter(Booking.status == status_filter)

    return query.order_by(Booking.booking_date.desc(), Booking.start_time.desc()).all()


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return _with_details(db.query(Booking)).filter(Booking.id_booking == booking_id).first()


def list_active_bookings_for_date(
    db: Session,
    *,
    facility_id: int,
    booking_date: date,
) -> List[Booking]:
    return (
        db.query(Booking)
        .filter(Booking.id_facility == facility_id)
        .filter(Booking.booking_date == booking_date)
        .filter(Booking.status.in_(ACTIVE_BOOKING_STATUSES))
        .order_by(Booking.start_time)
        .all()
    )


def facility_has_active_booking_in_range(
    db: Session,
    *,
    facility_id: int,
    booking_date: date,
    start_time: time,
    end_time: time,
) -> bool:
    """Return ``True`` when an active booking overlaps ``[start_time, end_time)``."""

    query = (
        db.query(Booking.id_booking)
        .filter(Booking.id_facility == facility_id)
        .filter(Booking.booking_date == booking_date)
        .filter(Booking.status.in_(ACTIVE_BOOKING_STATUSES))
        .filter(Booking.start_time < end_time)
        .filter(Booking.end_time > start_time)
    )
    return query.first() is not None


def create_booking(db: Session, booking: Booking) -> Booking:
    db.add(booking)
    db.flush()
    return booking


def save_booking(db: Session, booking: Booking) -> Booking:
    db.flush()
    db.commit()
    db.refresh(booking)
    return booking


def transition_status(
    db: Session,
    booking_id: int,
    *,
    from_status: str,
    to_status: str,
) -> bool:
    """Move a booking between statuses only if it is still in ``from_status``.

    Returns ``False`` when another transaction changed the status first.
    """

    result = db.execute(
        update(Booking)
        .where(Booking.id_booking == booking_id, Booking.status == from_status)
        .values(status=to_status)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def list_stale_pending_booking_ids(db: Session, *, before: date) -> Sequence[int]:
    rows = (
        db.query(Booking.id_booking)
        .filter(Booking.status == BookingStatus.PENDING.value)
        .filter(Booking.booking_date < before)
        .order_by(Booking.id_booking)
        .all()
    )
    return [row[0] for row in rows]


def list_kit_rentals(db: Session, booking_id: int) -> List[BookingKitRental]:
    return (
        db.query(BookingKitRental)
        .filter(BookingKitRental.id_booking == booking_id)
        .all()
    )


__all__ = [
    "create_booking",
    "facility_has_active_booking_in_range",
    "get_booking",
    "list_active_bookings_for_date",
    "list_bookings",
    "list_kit_rentals",
    "list_stale_pending_booking_ids",
    "save_booking",
    "transition_status",
]
