from datetime import timedelta
from decimal import Decimal

API = "/api/futsal/v1"


def _booking_body(facility, day, start="10:00", end="11:00", kit_rentals=()):
    return {
        "id_facility": facility.id_facility,
        "booking_date": day.isoformat(),
        "start_time": start,
        "end_time": end,
        "kit_rentals": list(kit_rentals),
    }


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_booking_requires_a_token(client, facility, booking_day):
    response = client.post(f"{API}/bookings/", json=_booking_body(facility, booking_day))

    assert response.status_code == 401
    assert response.json() == {"message": "Not authenticated"}


def test_garbage_token_is_unauthenticated(client, facility, booking_day):
    response = client.post(
        f"{API}/bookings/",
        json=_booking_body(facility, booking_day),
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 401
    assert "message" in response.json()


def test_create_booking_and_conflict(
    client, facility, kit, player, other_player, auth_headers, booking_day
):
    created = client.post(
        f"{API}/bookings/",
        json=_booking_body(
            facility,
            booking_day,
            start="16:00",
            end="18:00",
            kit_rentals=[{"id_kit": kit.id_kit, "quantity": 2}],
        ),
        headers=auth_headers(player),
    )

    assert created.status_code == 201
    body = created.json()
    assert body["status"] == "pending"
    assert body["payment_status"] == "pending"
    assert body["start_time"] == "16:00"
    assert body["end_time"] == "18:00"
    assert Decimal(body["total_price"]) == Decimal("1200")

    clash = client.post(
        f"{API}/bookings/",
        json=_booking_body(facility, booking_day, start="17:00", end="18:00"),
        headers=auth_headers(other_player),
    )
    assert clash.status_code == 409
    assert clash.json() == {"message": "Time slot already booked"}


def test_schema_errors_use_the_message_envelope(
    client, facility, player, auth_headers, booking_day
):
    response = client.post(
        f"{API}/bookings/",
        json=_booking_body(facility, booking_day, start="11:00", end="10:00"),
        headers=auth_headers(player),
    )

    assert response.status_code == 422
    assert isinstance(response.json()["message"], str)


def test_available_slots_endpoint(client, facility, player, auth_headers, booking_day):
    client.post(
        f"{API}/bookings/",
        json=_booking_body(facility, booking_day, start="10:00", end="11:00"),
        headers=auth_headers(player),
    )

    response = client.get(
        f"{API}/bookings/available-slots/{facility.id_facility}",
        params={"date": booking_day.isoformat()},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["slot_date"] == booking_day.isoformat()
    assert body["slots"][0]["start_time"] == "08:00"
    assert body["slots"][0]["end_time"] == "09:00"
    taken = [slot["start_time"] for slot in body["slots"] if not slot["is_available"]]
    assert taken == ["10:00"]


def test_available_slots_for_unknown_facility(client, booking_day):
    response = client.get(
        f"{API}/bookings/available-slots/999",
        params={"date": (booking_day + timedelta(days=1)).isoformat()},
    )

    assert response.status_code == 404
    assert response.json() == {"message": "Facility not found"}


def test_players_cannot_change_booking_status(client, facility, player, auth_headers, booking_day):
    created = client.post(
        f"{API}/bookings/",
        json=_booking_body(facility, booking_day),
        headers=auth_headers(player),
    ).json()

    response = client.patch(
        f"{API}/bookings/{created['id_booking']}/status",
        json={"status": "confirmed"},
        headers=auth_headers(player),
    )

    assert response.status_code == 403
    assert response.json() == {"message": "Access denied. Insufficient permissions."}


def test_owner_confirms_and_lists_bookings(
    client, facility, owner, player, auth_headers, booking_day
):
    created = client.post(
        f"{API}/bookings/",
        json=_booking_body(facility, booking_day),
        headers=auth_headers(player),
    ).json()

    confirmed = client.patch(
        f"{API}/bookings/{created['id_booking']}/status",
        json={"status": "confirmed"},
        headers=auth_headers(owner),
    )
    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "confirmed"

    owner_view = client.get(f"{API}/bookings/owner", headers=auth_headers(owner))
    assert owner_view.status_code == 200
    assert [row["id_booking"] for row in owner_view.json()] == [created["id_booking"]]

    mine = client.get(f"{API}/bookings/my-bookings", headers=auth_headers(player))
    assert [row["status"] for row in mine.json()] == ["confirmed"]


def test_payment_endpoint_requires_authentication(
    client, facility, player, auth_headers, booking_day
):
    created = client.post(
        f"{API}/bookings/",
        json=_booking_body(facility, booking_day),
        headers=auth_headers(player),
    ).json()

    anonymous = client.put(
        f"{API}/bookings/{created['id_booking']}/payment", json={"payment_status": "paid"}
    )
    assert anonymous.status_code == 401

    paid = client.put(
        f"{API}/bookings/{created['id_booking']}/payment",
        json={"payment_status": "paid"},
        headers=auth_headers(player),
    )
    assert paid.status_code == 200
    assert paid.json()["payment_status"] == "paid"


def test_kit_booking_flow(client, facility, kit, player, auth_headers, booking_day):
    booking = client.post(
        f"{API}/bookings/",
        json=_booking_body(facility, booking_day),
        headers=auth_headers(player),
    ).json()

    created = client.post(
        f"{API}/kit-bookings/",
        json={
            "id_facility": facility.id_facility,
            "id_booking": booking["id_booking"],
            "kit_rentals": [{"id_kit": kit.id_kit, "quantity": 2}],
        },
        headers=auth_headers(player),
    )
    assert created.status_code == 201
    assert Decimal(created.json()["total_amount"]) == Decimal("200")

    stock = client.get(f"{API}/kits/{kit.id_kit}").json()["quantity"]
    assert stock == 0

    cancelled = client.put(
        f"{API}/kit-bookings/{created.json()['id_kit_booking']}/status",
        json={"status": "cancelled"},
        headers=auth_headers(player),
    )
    assert cancelled.status_code == 200
    assert client.get(f"{API}/kits/{kit.id_kit}").json()["quantity"] == 2


def test_owner_manages_catalog(client, owner, player, auth_headers):
    denied = client.post(
        f"{API}/facilities/",
        json={"name": "Player court", "location": "Somewhere", "price_per_hour": "50"},
        headers=auth_headers(player),
    )
    assert denied.status_code == 403

    facility = client.post(
        f"{API}/facilities/",
        json={
            "name": "Cancha Este",
            "location": "Av. Sol 8",
            "price_per_hour": "80.00",
            "opening_time": "10:00",
            "closing_time": "20:00",
        },
        headers=auth_headers(owner),
    )
    assert facility.status_code == 201
    assert facility.json()["opening_time"] == "10:00"

    kit = client.post(
        f"{API}/kits/",
        json={
            "id_facility": facility.json()["id_facility"],
            "name": "Bibs",
            "type": "Accessories",
            "price": "2.50",
            "size": "U",
            "quantity": 12,
        },
        headers=auth_headers(owner),
    )
    assert kit.status_code == 201

    listed = client.get(f"{API}/kits/facility/{facility.json()['id_facility']}")
    assert [item["name"] for item in listed.json()] == ["Bibs"]

    removed = client.delete(f"{API}/kits/{kit.json()['id_kit']}", headers=auth_headers(owner))
    assert removed.status_code == 204

    mine = client.get(f"{API}/facilities/mine", headers=auth_headers(owner))
    assert [item["name"] for item in mine.json()] == ["Cancha Este"]
