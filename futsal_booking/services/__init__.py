"""Domain services for the futsal booking service."""

from futsal_booking.services.availability_service import AvailabilityService
from futsal_booking.services.booking_service import BookingService
from futsal_booking.services.facility_service import FacilityService
from futsal_booking.services.inventory import InventoryLedger
from futsal_booking.services.kit_booking_service import KitBookingService
from futsal_booking.services.kit_service import KitService

__all__ = [
    "AvailabilityService",
    "BookingService",
    "FacilityService",
    "InventoryLedger",
    "KitBookingService",
    "KitService",
]
