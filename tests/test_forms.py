import math

import httpx

from admin_console.forms import FormBuffer, parse_float, parse_int, split_csv_list, submit_form
from admin_console.listing import ListController
from admin_console.resources import ACCOMMODATIONS, TRANSPORTATION, USERS

from helpers import RecordingTransport, envelope, list_payload


def test_numeric_parsing_uses_leading_digits():
    assert parse_int("12 rooms") == 12
    assert parse_int(" -3") == -3
    assert math.isnan(parse_int("abc"))
    assert math.isnan(parse_int(""))
    assert parse_float("3.5kg") == 3.5
    assert parse_float(".5") == 0.5
    assert math.isnan(parse_float("price"))


def test_split_csv_list_trims_and_drops_empty():
    assert split_csv_list(" wifi, pool ,, parking ,") == ["wifi", "pool", "parking"]
    assert split_csv_list("") == []


def test_payload_coercion():
    buffer = FormBuffer(TRANSPORTATION.form_fields)
    buffer.set("name", "Shuttle")
    buffer.set("capacity", "4")
    buffer.set("pricePerTrip", "25000")
    buffer.set("amenities", "water, wifi")
    payload = buffer.to_payload()

    assert payload["capacity"] == 4
    assert payload["pricePerTrip"] == 25000.0
    assert payload["pricePerHour"] is None
    assert payload["amenities"] == ["water", "wifi"]
    assert payload["type"] == "AIRPORT_PICKUP"
    assert payload["vehicleType"] == "STANDARD"
    assert payload["locationId"] is None


def test_non_numeric_price_is_sent_as_nan():
    rejection = httpx.Response(
        400, json={"success": False, "error": "pricePerNight: Input should be a finite number"}
    )
    transport = RecordingTransport(rejection)
    controller = ListController(transport.client(), ACCOMMODATIONS)
    buffer = FormBuffer(ACCOMMODATIONS.form_fields)
    buffer.open()
    buffer.set("name", "Hill View")
    buffer.set("pricePerNight", "abc")
    buffer.set("maxGuests", "2")

    assert submit_form(controller, buffer) is False

    assert b"NaN" in transport.requests[0].content
    assert math.isnan(transport.body()["pricePerNight"])
    assert buffer.is_open
    assert buffer.error == "pricePerNight: Input should be a finite number"
    assert buffer.values["pricePerNight"] == "abc"
    assert len(transport.requests) == 1


def test_transport_failure_uses_generic_message():
    transport = RecordingTransport(httpx.ConnectError("down"))
    controller = ListController(transport.client(), USERS)
    buffer = FormBuffer(USERS.form_fields, {"firstName": "A", "lastName": "B", "email": "a@b.io"})

    assert submit_form(controller, buffer) is False
    assert buffer.error == "Failed to create users"


def test_successful_create_resets_and_refetches():
    transport = RecordingTransport(
        envelope({"id": "u9"}),
        envelope(list_payload("users", [])),
    )
    controller = ListController(transport.client(), USERS)
    buffer = FormBuffer(USERS.form_fields)
    buffer.open()
    buffer.set("firstName", "Grace")
    buffer.set("lastName", "Ingabire")
    buffer.set("email", "grace@example.com")

    assert submit_form(controller, buffer) is True
    assert not buffer.is_open
    assert buffer.values == buffer.defaults
    assert [r.method for r in transport.requests] == ["POST", "GET"]
    assert transport.body(0)["role"] == "USER"


def test_create_and_update_against_mock_api(admin_client):
    controller = ListController(admin_client, ACCOMMODATIONS)
    controller.refresh()
    assert controller.page.total_items == 2

    buffer = FormBuffer(ACCOMMODATIONS.form_fields)
    buffer.open({"name": "Nyungwe Eco Camp", "locationId": "loc_nyu"})
    buffer.set("pricePerNight", "120000")
    buffer.set("maxGuests", "2")
    buffer.set("amenities", "hiking, breakfast")
    assert submit_form(controller, buffer) is True
    assert controller.page.total_items == 3
    created = next(item for item in controller.page.items if item["name"] == "Nyungwe Eco Camp")
    assert created["city"] == "Nyamasheke"
    assert created["isVerified"] is False

    editor = FormBuffer(ACCOMMODATIONS.form_fields)
    editor.open(created)
    assert editor.values["amenities"] == "hiking, breakfast"
    editor.set("pricePerNight", "99000")
    assert submit_form(controller, editor, action="update", record_id=created["id"]) is True
    updated = next(item for item in controller.page.items if item["id"] == created["id"])
    assert updated["pricePerNight"] == 99000.0

    bad = FormBuffer(ACCOMMODATIONS.form_fields, {"name": "Broken", "pricePerNight": "n/a", "maxGuests": "1"})
    assert submit_form(controller, bad) is False
    assert "pricePerNight" in bad.error
    assert controller.page.total_items == 3


def test_editing_a_listing_keeps_its_availability(api, auth_headers, admin_client):
    created = api.post(
        "/api/admin/accommodations",
        json={"name": "Quiet Cabin", "pricePerNight": 40000, "maxGuests": 2, "isAvailable": False},
        headers=auth_headers,
    ).json()["data"]

    controller = ListController(admin_client, ACCOMMODATIONS)
    controller.refresh()
    record = next(item for item in controller.page.items if item["id"] == created["id"])

    editor = FormBuffer(ACCOMMODATIONS.form_fields)
    editor.open(record)
    editor.set("description", "Closed until spring")
    assert submit_form(controller, editor, action="update", record_id=created["id"]) is True

    stored = api.get(
        "/api/admin/accommodations", params={"search": "Quiet Cabin"}, headers=auth_headers
    ).json()["data"]["accommodations"][0]
    assert stored["description"] == "Closed until spring"
    assert stored["isAvailable"] is False
