from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from futsal_booking.models.kit import Kit, KitType
from futsal_booking.models.user import User
from futsal_booking.repository import kit_repository
from futsal_booking.schemas.kit import KitCreate, KitUpdate
from futsal_booking.services.facility_service import FacilityService


class KitService:
    def __init__(self, db: Session):
        self.db = db
        self.facility_service = FacilityService(db)

    def list_kits(self) -> list[Kit]:
        return kit_repository.list_kits(self.db)

    def list_facility_kits(self, facility_id: int) -> list[Kit]:
        self.facility_service.get_facility(facility_id)
        return kit_repository.list_kits(self.db, facility_id=facility_id)

    def list_owner_kits(self, owner: User, *, category: Optional[str] = None) -> list[Kit]:
        kit_type: Optional[str] = None
        if category and category != "All":
            try:
                kit_type = KitType(category).value
            except ValueError as exc:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Unknown kit category: {category}",
                ) from exc
        return kit_repository.list_kits(self.db, owner_id=owner.id_user, kit_type=kit_type)

    def get_kit(self, kit_id: int) -> Kit:
        kit = kit_repository.get_kit(self.db, kit_id)
        if kit is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Kit not found",
            )
        return kit

    def _get_owned_kit(self, kit_id: int, owner: User) -> Kit:
        kit = self.get_kit(kit_id)
        self.facility_service.get_owned_facility(kit.id_facility, owner)
        return kit

    def create_kit(self, owner: User, kit_in: KitCreate) -> Kit:
        self.facility_service.get_owned_facility(kit_in.id_facility, owner)

        kit_data = kit_in.model_dump()
        kit_data["type"] = kit_in.type.value
        kit = Kit(**kit_data)
        try:
            kit_repository.create_kit(self.db, kit)
            self.db.commit()
            self.db.refresh(kit)
            return kit
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create kit",
            ) from exc

    def update_kit(self, kit_id: int, owner: User, kit_in: KitUpdate) -> Kit:
        kit = self._get_owned_kit(kit_id, owner)
        update_data = kit_in.model_dump(exclude_unset=True)

        for attr, value in update_data.items():
            if value is None and attr != "description":
                continue
            if isinstance(value, KitType):
                value = value.value
            setattr(kit, attr, value)

        try:
            self.db.flush()
            self.db.commit()
            self.db.refresh(kit)
            return kit
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update kit",
            ) from exc

    def delete_kit(self, kit_id: int, owner: User) -> None:
        kit = self._get_owned_kit(kit_id, owner)
        if kit_repository.kit_has_rentals(self.db, kit_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Kit has rentals and cannot be deleted; mark it as unavailable instead",
            )
        try:
            kit_repository.delete_kit(self.db, kit)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to delete kit",
            ) from exc
