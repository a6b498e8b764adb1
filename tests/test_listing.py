import httpx
import pytest

from admin_console.listing import ListController, ListQuery, ListState, Page
from admin_console.resources import BOOKINGS, USERS

from helpers import RecordingTransport, envelope, list_payload


def _user(user_id, **overrides):
    record = {
        "id": user_id,
        "firstName": user_id.title(),
        "lastName": "Test",
        "email": f"{user_id}@example.com",
        "role": "USER",
        "isActive": True,
        "isVerified": True,
        "createdAt": "2024-05-01T10:00:00+00:00",
    }
    record.update(overrides)
    return record


def _booking(booking_id):
    return {
        "id": booking_id,
        "serviceType": "TOUR",
        "status": "PENDING",
        "totalAmount": 100.0,
        "currency": "RWF",
        "user": {"firstName": "Ana", "lastName": "B", "email": "ana@example.com"},
        "tour": {"name": "City walk", "type": "CITY_TOUR"},
        "createdAt": "2024-05-01T10:00:00+00:00",
    }


def test_filter_change_resets_page():
    query = ListQuery(page=4, page_size=20)
    assert query.with_filter("role", "ADMIN").page == 1
    assert query.with_search("jean").page == 1
    assert query.with_page(3).reset_filters() == ListQuery(page=1, page_size=20)


def test_query_rejects_invalid_page():
    with pytest.raises(ValueError):
        ListQuery(page=0)


def test_admin_role_filter_with_empty_result_shows_empty_state():
    transport = RecordingTransport(envelope(list_payload("users", [])))
    controller = ListController(transport.client(), USERS)

    assert controller.set_filter("role", "ADMIN") is True
    params = transport.params()
    assert params["role"] == "ADMIN"
    assert params["page"] == "1"
    assert params["limit"] == "20"
    assert "search" not in params
    assert controller.state is ListState.LOADED
    assert controller.is_empty
    assert controller.error is None
    assert USERS.empty_message == "No users found"


def test_user_status_filter_expands_to_flags():
    transport = RecordingTransport(envelope(list_payload("users", [])))
    controller = ListController(transport.client(), USERS)

    controller.set_filter("status", "active")
    assert transport.params()["isActive"] == "true"
    assert transport.params()["isVerified"] == "true"

    controller.set_filter("status", "unverified")
    assert transport.params()["isVerified"] == "false"
    assert "isActive" not in transport.params()

    controller.set_filter("status", "all")
    assert "isVerified" not in transport.params()


def test_page_from_page_two_filter_change_requests_page_one():
    transport = RecordingTransport(envelope(list_payload("users", [_user("a")], page=1)))
    controller = ListController(transport.client(), USERS)
    controller.query = controller.query.with_page(2)

    controller.set_search("  jean ")
    assert transport.params()["page"] == "1"
    assert transport.params()["search"] == "jean"


def test_oversized_server_page_is_truncated():
    users = [_user(f"u{index}") for index in range(25)]
    transport = RecordingTransport(envelope(list_payload("users", users, total_items=25)))
    controller = ListController(transport.client(), USERS)

    controller.refresh()
    assert len(controller.page.items) == 20
    assert len(Page(items=tuple(range(30)), page_size=12).items) == 12


def test_out_of_order_responses_keep_latest_page():
    transport = RecordingTransport(envelope(list_payload("bookings", [])))
    controller = ListController(transport.client(), BOOKINGS)

    controller.query = controller.query.with_page(2)
    to_page_two = controller.begin_fetch()
    controller.query = controller.query.with_page(3)
    to_page_three = controller.begin_fetch()

    page_three = Page(items=(BOOKINGS.mapper(_booking("b3")),), page=3, total_pages=3, total_items=41)
    page_two = Page(items=(BOOKINGS.mapper(_booking("b2")),), page=2, total_pages=3, total_items=41)

    assert controller.complete_fetch(to_page_three, page_three) is True
    assert controller.complete_fetch(to_page_two, page_two) is False
    assert controller.page is page_three
    assert controller.current_page == 3
    assert controller.page.page == 3


def test_failure_keeps_last_good_page():
    transport = RecordingTransport(
        envelope(list_payload("users", [_user("a"), _user("b")])),
        httpx.ConnectError("connection refused"),
    )
    controller = ListController(transport.client(), USERS)
    assert controller.refresh() is True
    loaded = controller.page

    assert controller.next_page() is False
    assert controller.page is loaded
    assert controller.state is ListState.ERRORED
    assert controller.error.startswith("Failed to load users")


def test_envelope_failure_is_reported():
    transport = RecordingTransport(
        httpx.Response(200, json={"success": False, "error": "Database unavailable"})
    )
    controller = ListController(transport.client(), USERS)

    assert controller.refresh() is False
    assert controller.error == "Failed to load users: Database unavailable"
    assert controller.page.items == ()


def test_record_without_id_fails_the_fetch():
    nameless = {key: value for key, value in _user("b").items() if key != "id"}
    transport = RecordingTransport(
        envelope(list_payload("users", [_user("a")])),
        envelope(list_payload("users", [_user("c"), nameless])),
    )
    controller = ListController(transport.client(), USERS)
    assert controller.refresh() is True
    loaded = controller.page

    assert controller.refresh() is False
    assert controller.page is loaded
    assert controller.state is ListState.ERRORED
    assert controller.error == "Failed to load users: Malformed users response"


def test_no_token_means_no_request():
    transport = RecordingTransport(envelope(list_payload("users", [])))
    controller = ListController(transport.client(token=None), USERS)

    assert controller.refresh() is False
    assert controller.set_filter("role", "ADMIN") is False
    assert transport.requests == []
    assert controller.state is ListState.IDLE
    assert controller.set_flag("a", "isActive", False) == "Admin token is missing"
    assert transport.requests == []


def test_set_flag_patches_only_target_after_ack():
    users = [_user("a"), _user("b"), _user("c")]
    transport = RecordingTransport(
        envelope(list_payload("users", users)),
        envelope({"id": "b", "isActive": False}),
    )
    controller = ListController(transport.client(), USERS)
    controller.refresh()
    before = controller.page.items

    assert controller.set_flag("b", "isActive", False) is None
    after = controller.page.items

    assert after is not before
    assert after[0] is before[0]
    assert after[2] is before[2]
    assert after[1] == {**before[1], "isActive": False}
    assert before[1]["isActive"] is True

    request = transport.requests[-1]
    assert request.method == "PUT"
    assert request.url.path == "/api/admin/users/b/status"
    assert transport.body() == {"isActive": False}


def test_set_flag_failure_leaves_list_untouched():
    transport = RecordingTransport(
        envelope(list_payload("bookings", [_booking("b1")])),
        httpx.Response(404, json={"success": False, "error": "Booking not found"}),
    )
    controller = ListController(transport.client(), BOOKINGS)
    controller.refresh()
    page = controller.page

    assert controller.set_flag("b1", "status", "CONFIRMED") == "Booking not found"
    assert controller.page is page


def test_unknown_flag_is_rejected():
    transport = RecordingTransport(envelope({}))
    controller = ListController(transport.client(), BOOKINGS)
    with pytest.raises(ValueError):
        controller.set_flag("b1", "isVerified", True)


def test_controller_against_mock_api(admin_client):
    controller = ListController(admin_client, USERS)
    assert controller.set_filter("status", "inactive") is True
    assert [user["id"] for user in controller.page.items] == ["usr_gorilla"]
    assert controller.page.items[0]["name"] == "Eric Habimana"

    assert controller.set_flag("usr_gorilla", "isActive", True) is None
    assert controller.page.items[0]["isActive"] is True
