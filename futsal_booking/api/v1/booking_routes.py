"""API routes for court bookings and slot availability."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from futsal_booking.core.security import get_current_user, require_owner
from futsal_booking.dependencies import get_db
from futsal_booking.models.booking import BookingStatus
from futsal_booking.models.user import User
from futsal_booking.schemas.booking import (
    AvailableSlotsResponse,
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
    OwnerBookingResponse,
    PaymentStatusUpdate,
)
from futsal_booking.services.availability_service import AvailabilityService
from futsal_booking.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("/available-slots/{facility_id}", response_model=AvailableSlotsResponse)
def list_available_slots(
    facility_id: int,
    *,
    db: Session = Depends(get_db),
    date_value: Optional[date] = Query(
        None, alias="date", description="Day to list slots for; defaults to today"
    ),
) -> AvailableSlotsResponse:
    """List the hourly slots of a facility and whether each one is still free.

    When ``date`` is today and the facility closes within the hour, the slots of
    the following day are returned instead; ``slot_date`` tells which day it is.
    """

    service = AvailabilityService(db)
    return service.list_available_slots(facility_id, target_date=date_value or date.today())


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingResponse:
    service = BookingService(db)
    return service.create_booking(current_user, payload)


@router.get("/my-bookings", response_model=List[BookingResponse])
def list_my_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> List[BookingResponse]:
    """Retrieve the bookings of the authenticated user, newest first."""

    service = BookingService(db)
    return service.list_my_bookings(current_user)


@router.get("/owner", response_model=List[OwnerBookingResponse])
def list_owner_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner),
) -> List[OwnerBookingResponse]:
    """Retrieve bookings across the owner's facilities with their kit bookings."""

    service = BookingService(db)
    return service.list_owner_bookings(current_user)


@router.get("/facility/{facility_id}", response_model=List[BookingResponse])
def list_facility_bookings(
    facility_id: int,
    *,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner),
    status_filter: Optional[BookingStatus] = Query(
        None, alias="status", description="Filter bookings by status"
    ),
) -> List[BookingResponse]:
    service = BookingService(db)
    return service.list_facility_bookings(
        facility_id,
        current_user,
        status_filter=status_filter.value if status_filter else None,
    )


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingResponse:
    service = BookingService(db)
    return service.get_booking(booking_id, current_user)


@router.patch("/{booking_id}/status", response_model=BookingResponse)
def update_booking_status(
    booking_id: int,
    payload: BookingStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner),
) -> BookingResponse:
    """Confirm, complete or cancel a booking of one of the owner's facilities."""

    service = BookingService(db)
    return service.update_status(booking_id, payload.status, current_user)


@router.put("/{booking_id}/payment", response_model=BookingResponse)
def update_payment_status(
    booking_id: int,
    payload: PaymentStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingResponse:
    service = BookingService(db)
    return service.update_payment_status(booking_id, payload.payment_status, current_user)
