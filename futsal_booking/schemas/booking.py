from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field as PydanticField,
    ValidationInfo,
    field_validator,
)

from futsal_booking.models.booking import BookingStatus, PaymentStatus
from futsal_booking.schemas.common import ClockTime
from futsal_booking.schemas.facility import FacilitySummary, OwnerSummary
from futsal_booking.schemas.kit import KitSummary


class KitRentalRequest(BaseModel):
    id_kit: int = PydanticField(..., gt=0)
    quantity: int = PydanticField(..., ge=1)


class BookingCreate(BaseModel):
    """Payload used to reserve a court, optionally renting kits with it."""

    id_facility: int = PydanticField(..., gt=0)
    booking_date: date
    start_time: time
    end_time: time
    kit_rentals: List[KitRentalRequest] = []

    @field_validator("end_time")
    def validate_time_range(cls, end_time: time, info: ValidationInfo) -> time:
        start_time = info.data.get("start_time")
        if start_time is not None and end_time <= start_time:
            raise ValueError("end_time must be after start_time")
        return end_time


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus


class BookingKitRentalResponse(BaseModel):
    id_kit: int
    quantity: int
    price: Decimal
    kit: Optional[KitSummary] = None

    model_config = ConfigDict(from_attributes=True)


class BookingResponse(BaseModel):
    id_booking: int
    id_user: int
    id_facility: int
    booking_date: date
    start_time: ClockTime
    end_time: ClockTime
    total_price: Decimal
    status: BookingStatus
    payment_status: PaymentStatus
    created_at: Optional[datetime] = None
    kit_rentals: List[BookingKitRentalResponse] = []
    facility: Optional[FacilitySummary] = None

    model_config = ConfigDict(from_attributes=True)


class AttachedKitBookingSummary(BaseModel):
    id_kit_booking: int
    status: BookingStatus
    total_amount: Decimal
    items: List[BookingKitRentalResponse] = []

    model_config = ConfigDict(from_attributes=True)


class OwnerBookingResponse(BookingResponse):
    """Booking as seen by the facility owner, with kit bookings merged in."""

    user: Optional[OwnerSummary] = None
    kit_bookings: List[AttachedKitBookingSummary] = []
    kit_bookings_total: Decimal = Decimal("0")
    grand_total: Decimal = Decimal("0")


class AvailableSlotResponse(BaseModel):
    start_time: ClockTime
    end_time: ClockTime
    is_available: bool
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class AvailableSlotsResponse(BaseModel):
    slot_date: date
    slots: List[AvailableSlotResponse]

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "AttachedKitBookingSummary",
    "AvailableSlotResponse",
    "AvailableSlotsResponse",
    "BookingCreate",
    "BookingKitRentalResponse",
    "BookingResponse",
    "BookingStatusUpdate",
    "KitRentalRequest",
    "OwnerBookingResponse",
    "PaymentStatusUpdate",
]
