from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload

from futsal_booking.models.booking import BookingKitRental
from futsal_booking.models.facility import Facility
from futsal_booking.models.kit import Kit
from futsal_booking.models.kit_booking import KitBookingItem


def list_kits(
    db: Session,
    *,
    facility_id: Optional[int] = None,
    owner_id: Optional[int] = None,
    kit_type: Optional[str] = None,
) -> List[Kit]:
    query = db.query(Kit).options(joinedload(Kit.facility))

    if owner_id is not None:
        query = query.join(Kit.facility).filter(Facility.id_owner == owner_id)
    if facility_id is not None:
        query = query.filter(Kit.id_facility == facility_id)
    if kit_type is not None:
        query = query.filter(Kit.type == kit_type)

    return query.order_by(Kit.type, Kit.name, Kit.id_kit).all()


def get_kit(db: Session, kit_id: int) -> Optional[Kit]:
    return (
        db.query(Kit)
        .options(joinedload(Kit.facility))
        .filter(Kit.id_kit == kit_id)
        .first()
    )


def get_kits_by_ids(db: Session, kit_ids: Iterable[int]) -> Dict[int, Kit]:
    unique_ids = {kit_id for kit_id in kit_ids}
    if not unique_ids:
        return {}

    kits = db.query(Kit).filter(Kit.id_kit.in_(unique_ids)).all()
    return {kit.id_kit: kit for kit in kits}


def create_kit(db: Session, kit: Kit) -> Kit:
    db.add(kit)
    db.flush()
    return kit


def delete_kit(db: Session, kit: Kit) -> None:
    db.delete(kit)


def kit_has_rentals(db: Session, kit_id: int) -> bool:
    in_bookings = (
        db.query(BookingKitRental.id_booking_kit_rental)
        .filter(BookingKitRental.id_kit == kit_id)
        .first()
    )
    if in_bookings is not None:
        return True

    in_kit_bookings = (
        db.query(KitBookingItem.id_kit_booking_item)
        .filter(KitBookingItem.id_kit == kit_id)
        .first()
    )
    return in_kit_bookings is not None


def reserve_stock(db: Session, kit_id: int, quantity: int) -> bool:
    """Atomically take ``quantity`` units out of stock.

    The decrement only applies when enough units remain and the kit is still
    available, so the stored quantity never goes below zero. Returns ``False``
    when no row matched.
    """

    result = db.execute(
        update(Kit)
        .where(
            Kit.id_kit == kit_id,
            Kit.is_available.is_(True),
            Kit.quantity >= quantity,
        )
        .values(quantity=Kit.quantity - quantity)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def release_stock(db: Session, kit_id: int, quantity: int) -> bool:
    """Atomically put ``quantity`` units back into stock."""

    result = db.execute(
        update(Kit)
        .where(Kit.id_kit == kit_id)
        .values(quantity=Kit.quantity + quantity)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


__all__ = [
    "create_kit",
    "delete_kit",
    "get_kit",
    "get_kits_by_ids",
    "kit_has_rentals",
    "list_kits",
    "release_stock",
    "reserve_stock",
]
