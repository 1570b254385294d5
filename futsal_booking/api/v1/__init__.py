from fastapi import APIRouter

from .booking_routes import router as booking_router
from .facility_routes import router as facility_router
from .kit_booking_routes import router as kit_booking_router
from .kit_routes import router as kit_router

router = APIRouter()
router.include_router(facility_router)
router.include_router(kit_router)
router.include_router(booking_router)
router.include_router(kit_booking_router)

__all__ = [
    "router",
    "booking_router",
    "facility_router",
    "kit_booking_router",
    "kit_router",
]
