"""Kit stock bookkeeping shared by booking admission and kit bookings."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Sequence, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from futsal_booking.models.booking import BookingStatus
from futsal_booking.models.kit import Kit
from futsal_booking.repository import kit_booking_repository, kit_repository
from futsal_booking.schemas.booking import KitRentalRequest

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


def to_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PricedRental:
    kit: Kit
    quantity: int
    unit_price: Decimal
    line_price: Decimal


class InventoryLedger:
    """Validates, prices and moves kit stock inside the caller's transaction.

    Nothing here commits: the caller owns the unit of work and rolls it back
    when any step raises.
    """

    def __init__(self, db: Session):
        self.db = db

    def price_rentals(
        self,
        facility_id: int,
        requests: Sequence[KitRentalRequest],
    ) -> List[PricedRental]:
        if not requests:
            return []

        kits = kit_repository.get_kits_by_ids(self.db, (item.id_kit for item in requests))
        requested_totals: Counter = Counter()
        for item in requests:
            requested_totals[item.id_kit] += item.quantity

        priced: List[PricedRental] = []
        for item in requests:
            kit = kits.get(item.id_kit)
            if kit is None:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"Kit not found: {item.id_kit}",
                )
            if kit.id_facility != facility_id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Kit {kit.name} does not belong to this facility",
                )
            if not kit.is_available:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Kit {kit.name} is not available",
                )
            if requested_totals[item.id_kit] > kit.quantity:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Insufficient quantity for kit: {kit.name}",
                )

            unit_price = to_money(kit.price)
            priced.append(
                PricedRental(
                    kit=kit,
                    quantity=item.quantity,
                    unit_price=unit_price,
                    line_price=to_money(unit_price * item.quantity),
                )
            )

        return priced

    def reserve(self, rentals: Iterable[PricedRental]) -> None:
        for rental in rentals:
            if not kit_repository.reserve_stock(self.db, rental.kit.id_kit, rental.quantity):
                # Another admission took the stock after the kit was priced.
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Insufficient quantity for kit: {rental.kit.name}",
                )

    def release(self, lines: Iterable[Tuple[int, int]]) -> None:
        for kit_id, quantity in lines:
            if not kit_repository.release_stock(self.db, kit_id, quantity):
                logger.warning(
                    "Could not restore %s unit(s) of kit %s: kit no longer exists",
                    quantity,
                    kit_id,
                )

    def cancel_kit_bookings_of(self, booking_id: int) -> int:
        """Cancel the kit bookings attached to a booking and restock their items.

        Each kit booking is moved with a status-guarded update, so one that a
        concurrent request already cancelled is skipped and never restocked twice.
        """

        cancelled = 0
        for kit_booking in kit_booking_repository.list_open_for_booking(self.db, booking_id):
            if not kit_booking_repository.transition_status(
                self.db,
                kit_booking.id_kit_booking,
                from_status=kit_booking.status,
                to_status=BookingStatus.CANCELLED.value,
            ):
                continue
            self.release((item.id_kit, item.quantity) for item in kit_booking.items)
            cancelled += 1

        if cancelled:
            logger.info("Cancelled %d kit booking(s) of booking %s", cancelled, booking_id)
        return cancelled


__all__ = ["InventoryLedger", "PricedRental", "to_money"]
