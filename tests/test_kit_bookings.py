from datetime import time
from decimal import Decimal

from fastapi import HTTPException
import pytest

from futsal_booking.models import BookingStatus, Kit
from futsal_booking.schemas.booking import BookingCreate, KitRentalRequest
from futsal_booking.schemas.kit_booking import KitBookingCreate
from futsal_booking.services.booking_service import BookingService
from futsal_booking.services.kit_booking_service import KitBookingService


@pytest.fixture
def court_booking(db, facility, player, booking_day):
    return BookingService(db).create_booking(
        player,
        BookingCreate(
            id_facility=facility.id_facility,
            booking_date=booking_day,
            start_time=time(20, 0),
            end_time=time(21, 0),
        ),
    )


def _kit_request(booking, kit, quantity=2):
    return KitBookingCreate(
        id_facility=booking.id_facility,
        id_booking=booking.id_booking,
        kit_rentals=[KitRentalRequest(id_kit=kit.id_kit, quantity=quantity)],
    )


def _stock(db, kit_id):
    db.expire_all()
    return db.get(Kit, kit_id).quantity


def test_kit_booking_takes_stock_and_totals_items(db, player, kit, court_booking):
    kit_booking = KitBookingService(db).create_kit_booking(player, _kit_request(court_booking, kit))

    assert kit_booking.status == BookingStatus.PENDING.value
    assert kit_booking.total_amount == Decimal("200.00")
    assert [(item.id_kit, item.quantity, item.price) for item in kit_booking.items] == [
        (kit.id_kit, 2, Decimal("100.00"))
    ]
    assert _stock(db, kit.id_kit) == 0


def test_cancellation_restores_stock_exactly_once(db, player, kit, court_booking):
    service = KitBookingService(db)
    kit_booking = service.create_kit_booking(player, _kit_request(court_booking, kit))

    cancelled = service.update_status(kit_booking.id_kit_booking, BookingStatus.CANCELLED, player)
    assert cancelled.status == BookingStatus.CANCELLED.value
    assert _stock(db, kit.id_kit) == 2

    with pytest.raises(HTTPException) as exc_info:
        service.update_status(kit_booking.id_kit_booking, BookingStatus.CANCELLED, player)
    assert exc_info.value.status_code == 400
    assert _stock(db, kit.id_kit) == 2


def test_owner_can_confirm_kit_booking(db, owner, player, kit, court_booking):
    service = KitBookingService(db)
    kit_booking = service.create_kit_booking(player, _kit_request(court_booking, kit, 1))

    confirmed = service.update_status(kit_booking.id_kit_booking, BookingStatus.CONFIRMED, owner)

    assert confirmed.status == BookingStatus.CONFIRMED.value
    assert _stock(db, kit.id_kit) == 1


def test_kits_only_go_on_your_own_booking(db, other_player, kit, court_booking):
    with pytest.raises(HTTPException) as exc_info:
        KitBookingService(db).create_kit_booking(other_player, _kit_request(court_booking, kit))

    assert exc_info.value.status_code == 403
    assert _stock(db, kit.id_kit) == 2


def test_no_kits_for_cancelled_bookings(db, owner, player, kit, court_booking):
    BookingService(db).update_status(court_booking.id_booking, BookingStatus.CANCELLED, owner)

    with pytest.raises(HTTPException) as exc_info:
        KitBookingService(db).create_kit_booking(player, _kit_request(court_booking, kit))

    assert exc_info.value.status_code == 409


def test_insufficient_stock_is_rejected(db, player, kit, court_booking):
    with pytest.raises(HTTPException) as exc_info:
        KitBookingService(db).create_kit_booking(player, _kit_request(court_booking, kit, 3))

    assert exc_info.value.status_code == 409
    assert _stock(db, kit.id_kit) == 2


def test_facility_mismatch_is_rejected(db, player, kit, court_booking):
    payload = KitBookingCreate(
        id_facility=court_booking.id_facility + 1,
        id_booking=court_booking.id_booking,
        kit_rentals=[KitRentalRequest(id_kit=kit.id_kit, quantity=1)],
    )

    with pytest.raises(HTTPException) as exc_info:
        KitBookingService(db).create_kit_booking(player, payload)

    assert exc_info.value.status_code == 400


def test_owner_listing_includes_kit_booking_totals(db, owner, player, kit, court_booking):
    KitBookingService(db).create_kit_booking(player, _kit_request(court_booking, kit))

    rows = BookingService(db).list_owner_bookings(owner)

    assert len(rows) == 1
    assert rows[0].kit_bookings_total == Decimal("200.00")
    assert rows[0].grand_total == Decimal("700.00")


def test_facility_listing_requires_ownership(db, owner, other_owner, player, kit, court_booking):
    service = KitBookingService(db)
    service.create_kit_booking(player, _kit_request(court_booking, kit, 1))

    assert len(service.list_facility_kit_bookings(court_booking.id_facility, owner)) == 1
    with pytest.raises(HTTPException) as exc_info:
        service.list_facility_kit_bookings(court_booking.id_facility, other_owner)
    assert exc_info.value.status_code == 403


def test_cancelling_the_court_booking_cancels_its_kit_bookings(
    db, owner, player, kit, court_booking
):
    service = KitBookingService(db)
    pending = service.create_kit_booking(player, _kit_request(court_booking, kit, 1))
    confirmed = service.create_kit_booking(player, _kit_request(court_booking, kit, 1))
    service.update_status(confirmed.id_kit_booking, BookingStatus.CONFIRMED, owner)
    assert _stock(db, kit.id_kit) == 0

    BookingService(db).update_status(court_booking.id_booking, BookingStatus.CANCELLED, owner)

    assert _stock(db, kit.id_kit) == 2
    statuses = {
        item.id_kit_booking: item.status for item in service.list_my_kit_bookings(player)
    }
    assert statuses == {
        pending.id_kit_booking: BookingStatus.CANCELLED.value,
        confirmed.id_kit_booking: BookingStatus.CANCELLED.value,
    }
    rows = BookingService(db).list_owner_bookings(owner)
    assert rows[0].kit_bookings == []
    assert rows[0].kit_bookings_total == Decimal("0.00")


def test_already_cancelled_kit_booking_is_not_restocked_again(
    db, owner, player, kit, court_booking
):
    service = KitBookingService(db)
    kit_booking = service.create_kit_booking(player, _kit_request(court_booking, kit))
    service.update_status(kit_booking.id_kit_booking, BookingStatus.CANCELLED, player)
    assert _stock(db, kit.id_kit) == 2

    BookingService(db).update_status(court_booking.id_booking, BookingStatus.CANCELLED, owner)

    assert _stock(db, kit.id_kit) == 2
