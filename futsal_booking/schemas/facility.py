from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field as PydanticField,
    model_validator,
)

from futsal_booking.schemas.common import ClockTime


class FacilityBase(BaseModel):
    name: str = PydanticField(..., min_length=1, max_length=200)
    description: Optional[str] = None
    location: str = PydanticField(..., min_length=1, max_length=300)
    price_per_hour: Decimal = PydanticField(..., gt=0, max_digits=10, decimal_places=2)
    opening_time: time = time(8, 0)
    closing_time: time = time(22, 0)
    is_available: bool = True

    @model_validator(mode="after")
    def _validate_schedule(self) -> "FacilityBase":
        if self.opening_time >= self.closing_time:
            raise ValueError("opening_time must be earlier than closing_time")
        return self


class FacilityCreate(FacilityBase):
    pass


class FacilityUpdate(BaseModel):
    name: Optional[str] = PydanticField(None, min_length=1, max_length=200)
    description: Optional[str] = None
    location: Optional[str] = PydanticField(None, min_length=1, max_length=300)
    price_per_hour: Optional[Decimal] = PydanticField(
        None, gt=0, max_digits=10, decimal_places=2
    )
    opening_time: Optional[time] = None
    closing_time: Optional[time] = None
    is_available: Optional[bool] = None


class OwnerSummary(BaseModel):
    id_user: int
    name: str
    email: str
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class FacilitySummary(BaseModel):
    id_facility: int
    name: str
    location: str
    price_per_hour: Decimal
    opening_time: ClockTime
    closing_time: ClockTime

    model_config = ConfigDict(from_attributes=True)


class FacilityResponse(BaseModel):
    id_facility: int
    name: str
    description: Optional[str] = None
    location: str
    price_per_hour: Decimal
    opening_time: ClockTime
    closing_time: ClockTime
    is_available: bool
    id_owner: int
    created_at: Optional[datetime] = None
    owner: Optional[OwnerSummary] = None

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "FacilityCreate",
    "FacilityResponse",
    "FacilitySummary",
    "FacilityUpdate",
    "OwnerSummary",
]
