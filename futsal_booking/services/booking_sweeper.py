"""Daily clean-up of pending bookings nobody confirmed."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, time, timedelta
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from futsal_booking.core.database import SessionLocal
from futsal_booking.models.booking import BookingStatus
from futsal_booking.repository import booking_repository
from futsal_booking.services.inventory import InventoryLedger

logger = logging.getLogger(__name__)


def cancel_stale_pending_bookings(db: Session, *, now: Optional[datetime] = None) -> int:
    """Cancel pending bookings dated up to the end of yesterday.

    Kit rentals embedded in those bookings go back into stock, and kit
    bookings attached to them are cancelled and restocked as well. Bookings are
    cancelled one by one with a status-guarded update, so running the sweep
    again (or concurrently with an owner confirming a booking) never cancels
    or restores anything twice. Returns the number of bookings cancelled.
    """

    cutoff = (now or datetime.now()).date()
    ledger = InventoryLedger(db)
    cancelled = 0

    try:
        for booking_id in booking_repository.list_stale_pending_booking_ids(db, before=cutoff):
            if not booking_repository.transition_status(
                db,
                booking_id,
                from_status=BookingStatus.PENDING.value,
                to_status=BookingStatus.CANCELLED.value,
            ):
                continue
            ledger.release(
                (rental.id_kit, rental.quantity)
                for rental in booking_repository.list_kit_rentals(db, booking_id)
            )
            ledger.cancel_kit_bookings_of(booking_id)
            cancelled += 1
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Daily booking sweep failed")
        raise

    logger.info("Cancelled %d stale pending booking(s) dated before %s", cancelled, cutoff)
    return cancelled


def seconds_until_next_run(now: datetime) -> float:
    next_midnight = datetime.combine(now.date() + timedelta(days=1), time.min)
    return (next_midnight - now).total_seconds()


async def run_daily_sweep(
    *,
    session_factory: sessionmaker = SessionLocal,
    clock: Callable[[], datetime] = datetime.now,
) -> None:
    """Run :func:`cancel_stale_pending_bookings` every day at local midnight."""

    while True:
        await asyncio.sleep(seconds_until_next_run(clock()))
        await asyncio.to_thread(_sweep_once, session_factory, clock())


def _sweep_once(session_factory: sessionmaker, now: datetime) -> None:
    db = session_factory()
    try:
        cancel_stale_pending_bookings(db, now=now)
    except SQLAlchemyError:
        # Already logged by the sweep.
        pass
    except Exception:
        logger.exception("Daily booking sweep crashed; next attempt at midnight")
    finally:
        db.close()


__all__ = ["cancel_stale_pending_bookings", "run_daily_sweep", "seconds_until_next_run"]
