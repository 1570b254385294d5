from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field as PydanticField

from futsal_booking.models.kit import KitType


class KitBase(BaseModel):
    name: str = PydanticField(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: KitType = KitType.JERSEY
    price: Decimal = PydanticField(..., ge=0, max_digits=10, decimal_places=2)
    size: str = PydanticField(..., min_length=1, max_length=30)
    quantity: int = PydanticField(..., ge=0)
    is_available: bool = True


class KitCreate(KitBase):
    id_facility: int = PydanticField(..., gt=0)


class KitUpdate(BaseModel):
    name: Optional[str] = PydanticField(None, min_length=1, max_length=200)
    description: Optional[str] = None
    type: Optional[KitType] = None
    price: Optional[Decimal] = PydanticField(None, ge=0, max_digits=10, decimal_places=2)
    size: Optional[str] = PydanticField(None, min_length=1, max_length=30)
    quantity: Optional[int] = PydanticField(None, ge=0)
    is_available: Optional[bool] = None


class KitFacilitySummary(BaseModel):
    id_facility: int
    name: str
    location: str

    model_config = ConfigDict(from_attributes=True)


class KitSummary(BaseModel):
    id_kit: int
    name: str
    type: KitType
    size: str
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class KitResponse(BaseModel):
    id_kit: int
    id_facility: int
    name: str
    description: Optional[str] = None
    type: KitType
    price: Decimal
    size: str
    quantity: int
    is_available: bool
    created_at: Optional[datetime] = None
    facility: Optional[KitFacilitySummary] = None

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "KitCreate",
    "KitFacilitySummary",
    "KitResponse",
    "KitSummary",
    "KitUpdate",
]
