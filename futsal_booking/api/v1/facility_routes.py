"""API routes for managing futsal facilities."""

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from futsal_booking.core.security import require_owner
from futsal_booking.dependencies import get_db
from futsal_booking.models.user import User
from futsal_booking.schemas.facility import FacilityCreate, FacilityResponse, FacilityUpdate
from futsal_booking.services.facility_service import FacilityService

router = APIRouter(prefix="/facilities", tags=["facilities"])


@router.get("/", response_model=List[FacilityResponse])
def list_facilities(
    *,
    db: Session = Depends(get_db),
    only_available: bool = Query(False, description="Only list facilities accepting bookings"),
) -> List[FacilityResponse]:
    service = FacilityService(db)
    return service.list_facilities(only_available=only_available)


@router.get("/mine", response_model=List[FacilityResponse])
def list_my_facilities(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner),
) -> List[FacilityResponse]:
    """Retrieve the facilities owned by the authenticated owner."""

    service = FacilityService(db)
    return service.list_owner_facilities(current_user)


@router.get("/{facility_id}", response_model=FacilityResponse)
def get_facility(facility_id: int, db: Session = Depends(get_db)) -> FacilityResponse:
    service = FacilityService(db)
    return service.get_facility(facility_id)


@router.post("/", response_model=FacilityResponse, status_code=status.HTTP_201_CREATED)
def create_facility(
    payload: FacilityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner),
) -> FacilityResponse:
    service = FacilityService(db)
    return service.create_facility(current_user, payload)


@router.put("/{facility_id}", response_model=FacilityResponse)
def update_facility(
    facility_id: int,
    payload: FacilityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner),
) -> FacilityResponse:
    service = FacilityService(db)
    return service.update_facility(facility_id, current_user, payload)


@router.delete("/{facility_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_facility(
    facility_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner),
) -> None:
    """Delete a facility that has never been booked."""

    service = FacilityService(db)
    service.delete_facility(facility_id, current_user)
