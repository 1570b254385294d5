from datetime import date, datetime, time, timedelta
from decimal import Decimal
from types import SimpleNamespace

from fastapi import HTTPException
import pytest

from futsal_booking.models import Booking
from futsal_booking.services.availability_service import (
    AvailabilityService,
    bookings_overlap,
    mark_availability,
)
from futsal_booking.services.slot_calculator import compute_slots


def _booked(start, end, status):
    return SimpleNamespace(start_time=start, end_time=end, status=status)


def test_mark_availability_ignores_inactive_bookings():
    window = compute_slots(
        time(8, 0), time(12, 0), date(2024, 6, 2), datetime(2024, 6, 1, 9, 0), price=Decimal("50")
    )
    bookings = [
        _booked(time(8, 0), time(9, 0), "pending"),
        _booked(time(9, 0), time(10, 0), "confirmed"),
        _booked(time(10, 0), time(11, 0), "cancelled"),
        _booked(time(11, 0), time(12, 0), "completed"),
    ]

    marked = mark_availability(window, bookings)

    assert [slot.is_available for slot in marked] == [False, False, True, True]


def test_mark_availability_uses_exact_ranges():
    window = compute_slots(
        time(8, 0), time(11, 0), date(2024, 6, 2), datetime(2024, 6, 1, 9, 0), price=Decimal("50")
    )
    # A 90 minute booking matches no hourly slot exactly.
    marked = mark_availability(window, [_booked(time(8, 0), time(9, 30), "confirmed")])

    assert all(slot.is_available for slot in marked)


def test_bookings_overlap_rejects_intersection_but_not_adjacency():
    existing = _booked(time(10, 0), time(11, 0), "confirmed")

    assert bookings_overlap(existing, time(10, 30), time(11, 30)) is True
    assert bookings_overlap(existing, time(9, 0), time(12, 0)) is True
    assert bookings_overlap(existing, time(11, 0), time(12, 0)) is False
    assert bookings_overlap(existing, time(9, 0), time(10, 0)) is False


def test_bookings_overlap_ignores_inactive_bookings():
    cancelled = _booked(time(10, 0), time(11, 0), "cancelled")
    pending = _booked(time(10, 0), time(11, 0), "pending")

    assert bookings_overlap(cancelled, time(10, 0), time(11, 0)) is False
    assert bookings_overlap(pending, time(10, 0), time(11, 0)) is True


def _add_booking(db, facility, player, day, start, end, status="pending"):
    booking = Booking(
        id_user=player.id_user,
        id_facility=facility.id_facility,
        booking_date=day,
        start_time=start,
        end_time=end,
        total_price=Decimal("500.00"),
        status=status,
        payment_status="pending",
    )
    db.add(booking)
    db.commit()
    return booking


def test_list_available_slots_marks_booked_hours(db, facility, player, booking_day):
    _add_booking(db, facility, player, booking_day, time(10, 0), time(11, 0), "confirmed")
    _add_booking(db, facility, player, booking_day, time(12, 0), time(13, 0), "cancelled")

    result = AvailabilityService(db).list_available_slots(
        facility.id_facility, target_date=booking_day
    )

    taken = {slot.start_time for slot in result["slots"] if not slot.is_available}
    assert result["slot_date"] == booking_day
    assert taken == {time(10, 0)}
    assert len(result["slots"]) == 14


def test_rollover_checks_bookings_of_the_next_day(db, facility, player):
    now = datetime(2024, 6, 1, 21, 30)
    tomorrow = date(2024, 6, 2)
    _add_booking(db, facility, player, tomorrow, time(8, 0), time(9, 0))

    result = AvailabilityService(db).list_available_slots(
        facility.id_facility, target_date=now.date(), now=now
    )

    assert result["slot_date"] == tomorrow
    assert result["slots"][0].start_time == time(8, 0)
    assert result["slots"][0].is_available is False


def test_unknown_facility_is_not_found(db):
    with pytest.raises(HTTPException) as exc_info:
        AvailabilityService(db).list_available_slots(
            999, target_date=date.today() + timedelta(days=1)
        )

    assert exc_info.value.status_code == 404
