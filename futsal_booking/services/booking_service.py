from __future__ import annotations

import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from futsal_booking.core.observability import AdmissionObserver, default_observer
from futsal_booking.models.booking import (
    Booking,
    BookingKitRental,
    BookingStatus,
    PaymentStatus,
)
from futsal_booking.models.facility import Facility
from futsal_booking.models.user import User
from futsal_booking.repository import (
    booking_repository,
    facility_repository,
    kit_booking_repository,
)
from futsal_booking.schemas.booking import (
    AttachedKitBookingSummary,
    BookingCreate,
    OwnerBookingResponse,
)
from futsal_booking.services.inventory import InventoryLedger, to_money
from futsal_booking.services.status_transitions import ensure_transition_allowed

logger = logging.getLogger(__name__)

_SLOT_TAKEN = "Time slot already booked"


def calculate_court_price(
    booking_date: date,
    start_time: time,
    end_time: time,
    price_per_hour: Decimal,
) -> Decimal:
    """Price ``[start_time, end_time)`` on ``booking_date``; fractional hours count."""

    duration = datetime.combine(booking_date, end_time) - datetime.combine(
        booking_date, start_time
    )
    if duration.total_seconds() <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_time must be after start_time",
        )

    hours = Decimal(int(duration.total_seconds())) / Decimal(3600)
    return to_money(hours * Decimal(price_per_hour))


class BookingService:

    def __init__(self, db: Session, *, observer: Optional[AdmissionObserver] = None):
        self.db = db
        self.observer = observer or default_observer
        self.ledger = InventoryLedger(db)

    def _get_booking(self, booking_id: int) -> Booking:
        booking = booking_repository.get_booking(self.db, booking_id)
        if booking is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Booking not found",
            )
        return booking

    def _get_facility(self, facility_id: int) -> Facility:
        facility = facility_repository.get_facility(self.db, facility_id)
        if facility is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Facility not found",
            )
        return facility

    @staticmethod
    def _ensure_facility_owner(facility: Facility, user: User) -> None:
        if facility.id_owner != user.id_user:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized",
            )

    @staticmethod
    def _validate_within_opening_hours(
        facility: Facility, start_time: time, end_time: time
    ) -> None:
        if start_time < facility.opening_time or end_time > facility.closing_time:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    "Booking must be within the facility opening hours"
                    f" ({facility.opening_time:%H:%M} - {facility.closing_time:%H:%M})"
                ),
            )

    # Admission

    def create_booking(self, user: User, payload: BookingCreate) -> Booking:
        """Admit a booking, pricing court time and kits and taking kit stock.

        Every step runs in one transaction. The facility row stays locked until
        commit so concurrent admissions for the same court queue up, and the
        partial unique index on active slots rejects anything that slips past.
        """

        self.observer.admission_started(user_id=user.id_user, payload=payload)

        try:
            booking_id = self._admit(user, payload)
            self.db.commit()
        except HTTPException as exc:
            self.db.rollback()
            self.observer.admission_failed(
                user_id=user.id_user,
                payload=payload,
                status_code=exc.status_code,
                reason=str(exc.detail),
            )
            raise
        except IntegrityError as exc:
            self.db.rollback()
            self.observer.admission_failed(
                user_id=user.id_user,
                payload=payload,
                status_code=status.HTTP_409_CONFLICT,
                reason="active slot uniqueness violated",
            )
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=_SLOT_TAKEN,
            ) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            self.observer.admission_failed(
                user_id=user.id_user,
                payload=payload,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                reason=type(exc).__name__,
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create booking",
            ) from exc

        booking = booking_repository.get_booking(self.db, booking_id)
        self.observer.admission_succeeded(booking=booking)
        return booking

    def _admit(self, user: User, payload: BookingCreate) -> int:
        facility = facility_repository.get_facility_for_update(self.db, payload.id_facility)
        if facility is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Facility not found",
            )
        if not facility.is_available:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Facility is not accepting bookings",
            )

        self._validate_within_opening_hours(facility, payload.start_time, payload.end_time)

        if booking_repository.facility_has_active_booking_in_range(
            self.db,
            facility_id=facility.id_facility,
            booking_date=payload.booking_date,
            start_time=payload.start_time,
            end_time=payload.end_time,
        ):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=_SLOT_TAKEN,
            )

        court_price = calculate_court_price(
            payload.booking_date,
            payload.start_time,
            payload.end_time,
            facility.price_per_hour,
        )
        rentals = self.ledger.price_rentals(facility.id_facility, payload.kit_rentals)
        kit_subtotal = sum((rental.line_price for rental in rentals), Decimal("0"))

        booking = Booking(
            id_user=user.id_user,
            id_facility=facility.id_facility,
            booking_date=payload.booking_date,
            start_time=payload.start_time,
            end_time=payload.end_time,
            total_price=to_money(court_price + kit_subtotal),
            status=BookingStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            kit_rentals=[
                BookingKitRental(
                    id_kit=rental.kit.id_kit,
                    quantity=rental.quantity,
                    price=rental.line_price,
                )
                for rental in rentals
            ],
        )
        booking_repository.create_booking(self.db, booking)
        self.ledger.reserve(rentals)
        return booking.id_booking

    # Queries

    def get_booking(self, booking_id: int, user: User) -> Booking:
        booking = self._get_booking(booking_id)
        facility = booking.facility or self._get_facility(booking.id_facility)
        if booking.id_user != user.id_user and facility.id_owner != user.id_user:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized",
            )
        return booking

    def list_my_bookings(self, user: User) -> List[Booking]:
        return booking_repository.list_bookings(self.db, user_id=user.id_user)

    def list_facility_bookings(
        self,
        facility_id: int,
        owner: User,
        *,
        status_filter: Optional[str] = None,
    ) -> List[Booking]:
        facility = self._get_facility(facility_id)
        self._ensure_facility_owner(facility, owner)
        return booking_repository.list_bookings(
            self.db,
            facility_id=facility_id,
            status_filter=status_filter,
        )

    def list_owner_bookings(self, owner: User) -> List[OwnerBookingResponse]:
        """Bookings across the owner's facilities with kit bookings merged in."""

        bookings = booking_repository.list_bookings(self.db, owner_id=owner.id_user)
        attached = kit_booking_repository.map_active_by_booking(
            self.db, (booking.id_booking for booking in bookings)
        )

        merged: List[OwnerBookingResponse] = []
        for booking in bookings:
            kit_bookings = attached.get(booking.id_booking, [])
            kit_total = to_money(
                sum((Decimal(item.total_amount) for item in kit_bookings), Decimal("0"))
            )
            response = OwnerBookingResponse.model_validate(booking)
            merged.append(
                response.model_copy(
                    update={
                        "kit_bookings": [
                            AttachedKitBookingSummary.model_validate(item)
                            for item in kit_bookings
                        ],
                        "kit_bookings_total": kit_total,
                        "grand_total": to_money(Decimal(booking.total_price) + kit_total),
                    }
                )
            )
        return merged

    # Lifecycle

    def update_status(
        self,
        booking_id: int,
        new_status: BookingStatus,
        acting_user: User,
    ) -> Booking:
        booking = self._get_booking(booking_id)
        facility = booking.facility or self._get_facility(booking.id_facility)
        self._ensure_facility_owner(facility, acting_user)

        current = booking.status
        target = new_status.value
        ensure_transition_allowed(current, target)

        rental_lines = [(rental.id_kit, rental.quantity) for rental in booking.kit_rentals]

        try:
            if not booking_repository.transition_status(
                self.db, booking_id, from_status=current, to_status=target
            ):
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Booking status changed concurrently; reload and retry",
                )
            if target == BookingStatus.CANCELLED.value:
                self.ledger.release(rental_lines)
                self.ledger.cancel_kit_bookings_of(booking_id)
            self.db.commit()
        except HTTPException:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update booking status",
            ) from exc

        logger.info("Booking %s moved from %s to %s", booking_id, current, target)
        return booking_repository.get_booking(self.db, booking_id)

    def update_payment_status(
        self,
        booking_id: int,
        payment_status: PaymentStatus,
        acting_user: User,
    ) -> Booking:
        booking = self._get_booking(booking_id)
        facility = booking.facility or self._get_facility(booking.id_facility)
        if booking.id_user != acting_user.id_user and facility.id_owner != acting_user.id_user:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized",
            )

        booking.payment_status = payment_status.value
        try:
            return booking_repository.save_booking(self.db, booking)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update payment status",
            ) from exc


__all__ = ["BookingService", "calculate_court_price"]
