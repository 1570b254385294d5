from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from futsal_booking.models.booking import Booking
from futsal_booking.models.facility import Facility


def list_facilities(
    db: Session,
    *,
    owner_id: Optional[int] = None,
    only_available: bool = False,
) -> List[Facility]:
    query = db.query(Facility)

    if owner_id is not None:
        query = query.filter(Facility.id_owner == owner_id)
    if only_available:
        query = query.filter(Facility.is_available.is_(True))

    return query.order_by(Facility.id_facility).all()


def get_facility(db: Session, facility_id: int) -> Optional[Facility]:
    return db.query(Facility).filter(Facility.id_facility == facility_id).first()


def get_facility_for_update(db: Session, facility_id: int) -> Optional[Facility]:
    """Fetch a facility locking its row until the surrounding transaction ends.

    Admissions for the same facility serialize on this lock. Backends without
    row locks (SQLite) ignore ``FOR UPDATE`` and serialize writers globally.
    """

    return (
        db.query(Facility)
        .filter(Facility.id_facility == facility_id)
        .with_for_update(of=Facility)
        .first()
    )


def create_facility(db: Session, facility: Facility) -> Facility:
    db.add(facility)
    db.flush()
    return facility


def delete_facility(db: Session, facility: Facility) -> None:
    db.delete(facility)


def facility_has_bookings(db: Session, facility_id: int) -> bool:
    match = (
        db.query(Booking.id_booking)
        .filter(Booking.id_facility == facility_id)
        .first()
    )
    return match is not None


__all__ = [
    "create_facility",
    "delete_facility",
    "facility_has_bookings",
    "get_facility",
    "get_facility_for_update",
    "list_facilities",
]
