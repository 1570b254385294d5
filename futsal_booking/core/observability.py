"""Extension points fired around booking admission."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from futsal_booking.models.booking import Booking
    from futsal_booking.schemas.booking import BookingCreate

logger = logging.getLogger(__name__)


class AdmissionObserver:
    """Receives admission lifecycle events. Subclass to forward them elsewhere."""

    def admission_started(self, *, user_id: int, payload: "BookingCreate") -> None:
        logger.info(
            "Admission started user=%s facility=%s date=%s %s-%s kits=%d",
            user_id,
            payload.id_facility,
            payload.booking_date.isoformat(),
            payload.start_time.strftime("%H:%M"),
            payload.end_time.strftime("%H:%M"),
            len(payload.kit_rentals),
        )

    def admission_succeeded(self, *, booking: "Booking") -> None:
        logger.info(
            "Admission succeeded booking=%s facility=%s total=%s",
            booking.id_booking,
            booking.id_facility,
            booking.total_price,
        )

    def admission_failed(
        self,
        *,
        user_id: int,
        payload: "BookingCreate",
        status_code: Optional[int],
        reason: str,
    ) -> None:
        logger.warning(
            "Admission rejected user=%s facility=%s status=%s reason=%s",
            user_id,
            payload.id_facility,
            status_code,
            reason,
        )


default_observer = AdmissionObserver()

__all__ = ["AdmissionObserver", "default_observer"]
