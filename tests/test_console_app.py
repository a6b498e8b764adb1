from admin_console.app import reset_filter_widgets
from admin_console.listing import ListController, ListQuery
from admin_console.resources import USERS

from helpers import RecordingTransport, envelope, list_payload


def test_reset_clears_widget_state_and_query():
    transport = RecordingTransport(envelope(list_payload("users", [])))
    controller = ListController(transport.client(), USERS)
    controller.set_search("jean")
    controller.set_filter("role", "ADMIN")
    state = {
        "users_search": "jean",
        "users_role": "ADMIN",
        "users_status": "all",
        "token": "secret",
    }

    assert reset_filter_widgets(controller, state) is True

    assert controller.query == ListQuery(page_size=USERS.page_size)
    assert state == {"token": "secret"}
    assert "search" not in transport.params()
    assert "role" not in transport.params()


def test_widget_keys_cover_search_and_filters():
    assert USERS.filter_widget_keys() == ("users_search", "users_role", "users_status")
