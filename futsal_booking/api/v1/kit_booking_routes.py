"""API routes for kit rentals attached to existing bookings."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from futsal_booking.core.security import get_current_user, require_owner
from futsal_booking.dependencies import get_db
from futsal_booking.models.user import User
from futsal_booking.schemas.kit_booking import (
    KitBookingCreate,
    KitBookingResponse,
    KitBookingStatusUpdate,
)
from futsal_booking.services.kit_booking_service import KitBookingService

router = APIRouter(prefix="/kit-bookings", tags=["kit-bookings"])


@router.post("/", response_model=KitBookingResponse, status_code=status.HTTP_201_CREATED)
def create_kit_booking(
    payload: KitBookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> KitBookingResponse:
    service = KitBookingService(db)
    return service.create_kit_booking(current_user, payload)


@router.get("/my-kit-bookings", response_model=List[KitBookingResponse])
def list_my_kit_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> List[KitBookingResponse]:
    service = KitBookingService(db)
    return service.list_my_kit_bookings(current_user)


@router.get("/facility/{facility_id}", response_model=List[KitBookingResponse])
def list_facility_kit_bookings(
    facility_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner),
) -> List[KitBookingResponse]:
    service = KitBookingService(db)
    return service.list_facility_kit_bookings(facility_id, current_user)


@router.put("/{kit_booking_id}/status", response_model=KitBookingResponse)
def update_kit_booking_status(
    kit_booking_id: int,
    payload: KitBookingStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> KitBookingResponse:
    """Change a kit booking status; cancelling returns the kits to stock."""

    service = KitBookingService(db)
    return service.update_status(kit_booking_id, payload.status, current_user)
