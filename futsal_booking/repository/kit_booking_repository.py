from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload, selectinload

from futsal_booking.models.booking import BookingStatus
from futsal_booking.models.kit_booking import KitBooking, KitBookingItem


def _with_details(query):
    return query.options(
        joinedload(KitBooking.facility),
        joinedload(KitBooking.user),
        joinedload(KitBooking.booking),
        selectinload(KitBooking.items).joinedload(KitBookingItem.kit),
    )


def list_kit_bookings(
    db: Session,
    *,
    user_id: Optional[int] = None,
    facility_id: Optional[int] = None,
) -> List[KitBooking]:
    query = _with_details(db.query(KitBooking))

    if user_id is not None:
        query = query.filter(KitBooking.id_user == user_id)
    if facility_id is not None:
        query = query.filter(KitBooking.id_facility == facility_id)

    return query.order_by(KitBooking.created_at.desc(), KitBooking.id_kit_booking.desc()).all()


def get_kit_booking(db: Session, kit_booking_id: int) -> Optional[KitBooking]:
    return (
        _with_details(db.query(KitBooking))
        .filter(KitBooking.id_kit_booking == kit_booking_id)
        .first()
    )


def map_active_by_booking(
    db: Session, booking_ids: Iterable[int]
) -> Dict[int, List[KitBooking]]:
    """Group non-cancelled kit bookings by the booking they belong to."""

    ids = list(booking_ids)
    if not ids:
        return {}

    kit_bookings = (
        db.query(KitBooking)
        .options(selectinload(KitBooking.items).joinedload(KitBookingItem.kit))
        .filter(KitBooking.id_booking.in_(ids))
        .filter(KitBooking.status != BookingStatus.CANCELLED.value)
        .order_by(KitBooking.id_kit_booking)
        .all()
    )

    grouped: Dict[int, List[KitBooking]] = {}
    for kit_booking in kit_bookings:
        grouped.setdefault(kit_booking.id_booking, []).append(kit_booking)
    return grouped


def list_open_for_booking(db: Session, booking_id: int) -> List[KitBooking]:
    """Kit bookings of a booking that still hold stock (pending or confirmed)."""

    return (
        db.query(KitBooking)
        .options(selectinload(KitBooking.items))
        .filter(KitBooking.id_booking == booking_id)
        .filter(
            KitBooking.status.in_(
                (BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value)
            )
        )
        .order_by(KitBooking.id_kit_booking)
        .all()
    )


def create_kit_booking(db: Session, kit_booking: KitBooking) -> KitBooking:
    db.add(kit_booking)
    db.flush()
    return kit_booking


def transition_status(
    db: Session,
    kit_booking_id: int,
    *,
    from_status: str,
    to_status: str,
) -> bool:
    result = db.execute(
        update(KitBooking)
        .where(
            KitBooking.id_kit_booking == kit_booking_id,
            KitBooking.status == from_status,
        )
        .values(status=to_status)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


__all__ = [
    "create_kit_booking",
    "get_kit_booking",
    "list_kit_bookings",
    "list_open_for_booking",
    "map_active_by_booking",
    "transition_status",
]
