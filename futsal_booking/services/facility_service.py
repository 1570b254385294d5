from __future__ import annotations

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from futsal_booking.models.facility import Facility
from futsal_booking.models.user import User
from futsal_booking.repository import facility_repository
from futsal_booking.schemas.facility import FacilityCreate, FacilityUpdate


class FacilityService:
    def __init__(self, db: Session):
        self.db = db

    def list_facilities(self, *, only_available: bool = False) -> list[Facility]:
        try:
            return facility_repository.list_facilities(self.db, only_available=only_available)
        except SQLAlchemyError as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to list facilities",
            ) from exc

    def list_owner_facilities(self, owner: User) -> list[Facility]:
        return facility_repository.list_facilities(self.db, owner_id=owner.id_user)

    def get_facility(self, facility_id: int) -> Facility:
        facility = facility_repository.get_facility(self.db, facility_id)
        if not facility:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Facility {facility_id} not found",
            )
        return facility

    def get_owned_facility(self, facility_id: int, owner: User) -> Facility:
        facility = self.get_facility(facility_id)
        if facility.id_owner != owner.id_user:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized to manage this facility",
            )
        return facility

    def create_facility(self, owner: User, facility_in: FacilityCreate) -> Facility:
        facility = Facility(**facility_in.model_dump(), id_owner=owner.id_user)
        try:
            facility_repository.create_facility(self.db, facility)
            self.db.commit()
            self.db.refresh(facility)
            return facility
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create facility",
            ) from exc

    def update_facility(
        self, facility_id: int, owner: User, facility_in: FacilityUpdate
    ) -> Facility:
        facility = self.get_owned_facility(facility_id, owner)
        update_data = facility_in.model_dump(exclude_unset=True)

        for attr, value in update_data.items():
            if value is None and attr != "description":
                continue
            setattr(facility, attr, value)

        self._validate_facility_entity(facility)

        try:
            self.db.flush()
            self.db.commit()
            self.db.refresh(facility)
            return facility
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update facility",
            ) from exc

    def delete_facility(self, facility_id: int, owner: User) -> None:
        facility = self.get_owned_facility(facility_id, owner)
        if facility_repository.facility_has_bookings(self.db, facility_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=(
                    "Facility has bookings and cannot be deleted; "
                    "mark it as unavailable instead"
                ),
            )
        try:
            facility_repository.delete_facility(self.db, facility)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to delete facility",
            ) from exc

    def _validate_facility_entity(self, facility: Facility) -> None:
        if facility.opening_time >= facility.closing_time:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="opening_time must be earlier than closing_time",
            )
