from __future__ import annotations

import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from futsal_booking.models.booking import BookingStatus
from futsal_booking.models.facility import Facility
from futsal_booking.models.kit_booking import KitBooking, KitBookingItem
from futsal_booking.models.user import User
from futsal_booking.repository import (
    booking_repository,
    facility_repository,
    kit_booking_repository,
)
from futsal_booking.schemas.kit_booking import KitBookingCreate
from futsal_booking.services.inventory import InventoryLedger
from futsal_booking.services.status_transitions import ensure_transition_allowed

logger = logging.getLogger(__name__)


class KitBookingService:
    """Kit rentals added to an existing booking, with their own lifecycle."""

    def __init__(self, db: Session):
        self.db = db
        self.ledger = InventoryLedger(db)

    def _get_kit_booking(self, kit_booking_id: int) -> KitBooking:
        kit_booking = kit_booking_repository.get_kit_booking(self.db, kit_booking_id)
        if kit_booking is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Kit booking not found",
            )
        return kit_booking

    def _get_facility(self, facility_id: int) -> Facility:
        facility = facility_repository.get_facility(self.db, facility_id)
        if facility is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Facility not found",
            )
        return facility

    def create_kit_booking(self, user: User, payload: KitBookingCreate) -> KitBooking:
        booking = booking_repository.get_booking(self.db, payload.id_booking)
        if booking is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Booking not found",
            )
        if booking.id_user != user.id_user:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Kits can only be added to your own bookings",
            )
        if booking.id_facility != payload.id_facility:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Booking does not belong to this facility",
            )
        if booking.status in (BookingStatus.CANCELLED.value, BookingStatus.COMPLETED.value):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Cannot rent kits for a {booking.status} booking",
            )

        try:
            rentals = self.ledger.price_rentals(payload.id_facility, payload.kit_rentals)
            kit_booking = KitBooking(
                id_user=user.id_user,
                id_facility=payload.id_facility,
                id_booking=booking.id_booking,
                status=BookingStatus.PENDING.value,
                items=[
                    KitBookingItem(
                        id_kit=rental.kit.id_kit,
                        quantity=rental.quantity,
                        price=rental.unit_price,
                    )
                    for rental in rentals
                ],
            )
            kit_booking_repository.create_kit_booking(self.db, kit_booking)
            self.ledger.reserve(rentals)
            kit_booking_id = kit_booking.id_kit_booking
            self.db.commit()
        except HTTPException:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create kit booking",
            ) from exc

        logger.info(
            "Kit booking %s created for booking %s", kit_booking_id, booking.id_booking
        )
        return kit_booking_repository.get_kit_booking(self.db, kit_booking_id)

    def list_my_kit_bookings(self, user: User) -> List[KitBooking]:
        return kit_booking_repository.list_kit_bookings(self.db, user_id=user.id_user)

    def list_facility_kit_bookings(self, facility_id: int, owner: User) -> List[KitBooking]:
        facility = self._get_facility(facility_id)
        if facility.id_owner != owner.id_user:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized",
            )
        return kit_booking_repository.list_kit_bookings(self.db, facility_id=facility_id)

    def update_status(
        self,
        kit_booking_id: int,
        new_status: BookingStatus,
        acting_user: User,
    ) -> KitBooking:
        """Change the status; cancelling puts every rented unit back in stock.

        The status change is conditional on the status read here, so two
        concurrent cancellations restore the stock only once.
        """

        kit_booking = self._get_kit_booking(kit_booking_id)
        facility = kit_booking.facility or self._get_facility(kit_booking.id_facility)
        if acting_user.id_user not in (kit_booking.id_user, facility.id_owner):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized",
            )

        current = kit_booking.status
        target = new_status.value
        ensure_transition_allowed(current, target, entity="Kit booking")

        rental_lines = [(item.id_kit, item.quantity) for item in kit_booking.items]

        try:
            if not kit_booking_repository.transition_status(
                self.db, kit_booking_id, from_status=current, to_status=target
            ):
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Kit booking status changed concurrently; reload and retry",
                )
            if target == BookingStatus.CANCELLED.value:
                self.ledger.release(rental_lines)
            self.db.commit()
        except HTTPException:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update kit booking status",
            ) from exc

        logger.info("Kit booking %s moved from %s to %s", kit_booking_id, current, target)
        return kit_booking_repository.get_kit_booking(self.db, kit_booking_id)


__all__ = ["KitBookingService"]
