from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field as PydanticField

from futsal_booking.models.booking import BookingStatus
from futsal_booking.schemas.booking import KitRentalRequest
from futsal_booking.schemas.facility import OwnerSummary
from futsal_booking.schemas.kit import KitFacilitySummary, KitSummary


class KitBookingCreate(BaseModel):
    id_facility: int = PydanticField(..., gt=0)
    id_booking: int = PydanticField(..., gt=0)
    kit_rentals: List[KitRentalRequest] = PydanticField(..., min_length=1)


class KitBookingStatusUpdate(BaseModel):
    status: BookingStatus


class KitBookingItemResponse(BaseModel):
    id_kit: int
    quantity: int
    price: Decimal
    kit: Optional[KitSummary] = None

    model_config = ConfigDict(from_attributes=True)


class KitBookingResponse(BaseModel):
    id_kit_booking: int
    id_user: int
    id_facility: int
    id_booking: int
    total_amount: Decimal
    status: BookingStatus
    created_at: Optional[datetime] = None
    items: List[KitBookingItemResponse] = []
    facility: Optional[KitFacilitySummary] = None
    user: Optional[OwnerSummary] = None

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "KitBookingCreate",
    "KitBookingItemResponse",
    "KitBookingResponse",
    "KitBookingStatusUpdate",
]
