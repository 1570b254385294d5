"""Pydantic schemas for the futsal booking service."""

from futsal_booking.schemas.booking import (
    AttachedKitBookingSummary,
    AvailableSlotResponse,
    AvailableSlotsResponse,
    BookingCreate,
    BookingKitRentalResponse,
    BookingResponse,
    BookingStatusUpdate,
    KitRentalRequest,
    OwnerBookingResponse,
    PaymentStatusUpdate,
)
from futsal_booking.schemas.facility import (
    FacilityCreate,
    FacilityResponse,
    FacilitySummary,
    FacilityUpdate,
    OwnerSummary,
)
from futsal_booking.schemas.kit import KitCreate, KitResponse, KitSummary, KitUpdate
from futsal_booking.schemas.kit_booking import (
    KitBookingCreate,
    KitBookingItemResponse,
    KitBookingResponse,
    KitBookingStatusUpdate,
)

__all__ = [
    "AttachedKitBookingSummary",
    "AvailableSlotResponse",
    "AvailableSlotsResponse",
    "BookingCreate",
    "BookingKitRentalResponse",
    "BookingResponse",
    "BookingStatusUpdate",
    "FacilityCreate",
    "FacilityResponse",
    "FacilitySummary",
    "FacilityUpdate",
    "KitBookingCreate",
    "KitBookingItemResponse",
    "KitBookingResponse",
    "KitBookingStatusUpdate",
    "KitCreate",
    "KitRentalRequest",
    "KitResponse",
    "KitSummary",
    "KitUpdate",
    "OwnerSummary",
    "PaymentStatusUpdate",
]
