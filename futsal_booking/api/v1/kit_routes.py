"""API routes for managing rentable kits."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from futsal_booking.core.security import require_owner
from futsal_booking.dependencies import get_db
from futsal_booking.models.user import User
from futsal_booking.schemas.kit import KitCreate, KitResponse, KitUpdate
from futsal_booking.services.kit_service import KitService

router = APIRouter(prefix="/kits", tags=["kits"])


@router.get("/", response_model=List[KitResponse])
def list_kits(db: Session = Depends(get_db)) -> List[KitResponse]:
    service = KitService(db)
    return service.list_kits()


@router.get("/mine", response_model=List[KitResponse])
def list_my_kits(
    *,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner),
    category: Optional[str] = Query(None, description="Filter kits by type, or 'All'"),
) -> List[KitResponse]:
    """Retrieve kits across every facility of the authenticated owner."""

    service = KitService(db)
    return service.list_owner_kits(current_user, category=category)


@router.get("/facility/{facility_id}", response_model=List[KitResponse])
def list_facility_kits(facility_id: int, db: Session = Depends(get_db)) -> List[KitResponse]:
    service = KitService(db)
    return service.list_facility_kits(facility_id)


@router.get("/{kit_id}", response_model=KitResponse)
def get_kit(kit_id: int, db: Session = Depends(get_db)) -> KitResponse:
    service = KitService(db)
    return service.get_kit(kit_id)


@router.post("/", response_model=KitResponse, status_code=status.HTTP_201_CREATED)
def create_kit(
    payload: KitCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner),
) -> KitResponse:
    service = KitService(db)
    return service.create_kit(current_user, payload)


@router.put("/{kit_id}", response_model=KitResponse)
def update_kit(
    kit_id: int,
    payload: KitUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner),
) -> KitResponse:
    service = KitService(db)
    return service.update_kit(kit_id, current_user, payload)


@router.delete("/{kit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_kit(
    kit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner),
) -> None:
    service = KitService(db)
    service.delete_kit(kit_id, current_user)
