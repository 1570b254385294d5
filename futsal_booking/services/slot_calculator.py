"""Hourly slot generation from a facility's opening hours."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Iterator

SLOT_DURATION = timedelta(hours=1)


@dataclass(frozen=True)
class TimeSlot:
    start_time: time
    end_time: time
    price: Decimal


@dataclass(frozen=True)
class SlotWindow:
    """Hourly slots ``[start, start + 1h)`` from ``start`` while ``start < end``.

    The window is restartable: every iteration regenerates the sequence from
    ``start``. ``slot_date`` is the calendar day the slots belong to, which is
    not always the requested day (see :func:`compute_slots`).
    """

    slot_date: date
    start: datetime
    end: datetime
    price: Decimal

    def __iter__(self) -> Iterator[TimeSlot]:
        current = self.start
        while current < self.end:
            slot_end = current + SLOT_DURATION
            yield TimeSlot(
                start_time=current.time(),
                end_time=slot_end.time(),
                price=self.price,
            )
            current = slot_end

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end


def compute_slots(
    opening_time: time,
    closing_time: time,
    target_date: date,
    now: datetime,
    *,
    price: Decimal,
) -> SlotWindow:
    """Return the bookable hourly slots of ``target_date`` as seen at ``now``.

    All values are facility-local and naive.

    * Today, from one hour before closing onwards, the facility counts as
      closed for the day and the full window of the next day is returned.
    * Today otherwise, slots start at the next full hour (never before
      opening, never after the last full hour before closing).
    * Any other day gets the full opening-to-closing window.
    """

    today = now.date()

    if target_date == today and now.hour >= closing_time.hour - 1:
        tomorrow = today + timedelta(days=1)
        return SlotWindow(
            slot_date=tomorrow,
            start=datetime.combine(tomorrow, opening_time),
            end=datetime.combine(tomorrow, closing_time),
            price=price,
        )

    start = datetime.combine(target_date, opening_time)
    end = datetime.combine(target_date, closing_time)

    if target_date == today:
        next_hour = min(max(now.hour + 1, opening_time.hour), closing_time.hour - 1)
        start = max(datetime.combine(target_date, time(next_hour)), start)

    return SlotWindow(slot_date=target_date, start=start, end=end, price=price)


__all__ = ["SLOT_DURATION", "SlotWindow", "TimeSlot", "compute_slots"]
