from datetime import date

import httpx

from admin_console.dashboard import ActivityFeed, DashboardAggregator, activity_priority

from helpers import RecordingTransport, envelope


def _activity_page(page, entries, total_pages=3):
    return {
        "activity": entries,
        "pagination": {"page": page, "limit": 25, "total": 60, "totalPages": total_pages},
    }


def test_activity_priority():
    assert activity_priority("PAYMENT_FAILED") == "high"
    assert activity_priority("BOOKING_CREATED") == "low"
    assert activity_priority("USER_REGISTERED") == "low"
    assert activity_priority("BOOKING_STATUS_UPDATED") == "medium"


def test_poll_response_after_manual_navigation_is_discarded():
    transport = RecordingTransport(
        envelope(_activity_page(2, [{"id": "p2", "type": "TOUR_CREATED"}]))
    )
    feed = ActivityFeed(transport.client())

    poll = feed.begin_poll(now=100.0)
    assert poll is not None
    assert feed.go_to_page(2) is True

    stale = _activity_page(1, [{"id": "p1", "type": "PAYMENT_FAILED"}])
    assert feed.complete(poll, stale) is False
    assert feed.page == 2
    assert [item["id"] for item in feed.items] == ["p2"]
    assert feed.items[0]["priority"] == "low"


def test_poll_is_suspended_while_navigation_pending():
    transport = RecordingTransport(envelope(_activity_page(2, [])))
    feed = ActivityFeed(transport.client(), interval=10.0, clock=lambda: 0.0)

    pending = feed.begin_page(2)
    assert feed.navigation_pending
    assert feed.begin_poll(now=20.0) is None

    feed.complete(pending, _activity_page(2, []))
    assert not feed.navigation_pending
    assert feed.begin_poll(now=20.0) is not None
    assert transport.requests == []


def test_poll_respects_interval_and_current_page():
    transport = RecordingTransport(envelope(_activity_page(1, [])))
    feed = ActivityFeed(transport.client(), interval=10.0)

    assert feed.poll(now=0.0) is True
    assert feed.poll(now=5.0) is False
    assert len(transport.requests) == 1

    feed.page = 3
    assert feed.poll(now=10.5) is True
    assert transport.params()["page"] == "3"
    assert len(transport.requests) == 2


def test_no_token_skips_feed_and_dashboard():
    transport = RecordingTransport(envelope({}))
    client = transport.client(token=None)
    dashboard = DashboardAggregator(client)

    assert dashboard.load() is False
    assert dashboard.feed.poll(now=0.0) is False
    assert transport.requests == []
    assert dashboard.stats["totalUsers"] == 0


def test_stats_keep_last_good_value_on_failure():
    stats = {"stats": {"totalUsers": 7, "totalRevenue": 10.0}, "recentBookings": []}
    transport = RecordingTransport(
        envelope(stats),
        envelope(_activity_page(1, [])),
        httpx.Response(503, json={"success": False, "error": "Service unavailable"}),
    )
    dashboard = DashboardAggregator(transport.client())

    assert dashboard.load() is True
    assert dashboard.stats["totalUsers"] == 7

    assert dashboard.load() is False
    assert dashboard.stats["totalUsers"] == 7
    assert dashboard.error == "Failed to load dashboard: Service unavailable"


def test_dashboard_against_mock_api(admin_client):
    dashboard = DashboardAggregator(admin_client)
    assert dashboard.load() is True

    assert dashboard.stats["totalUsers"] == 4
    assert dashboard.stats["totalRevenue"] == 570000.0
    assert dashboard.stats["pendingBookings"] == 1
    assert dashboard.stats["unverifiedAccommodations"] == 1
    assert len(dashboard.recent_bookings) == 4
    assert dashboard.feed.items
    assert {item["priority"] for item in dashboard.feed.items} <= {"low", "medium", "high"}
    assert any(item["type"] == "PAYMENT_FAILED" and item["priority"] == "high" for item in dashboard.feed.items)

    assert dashboard.load_pending() is True
    assert [b["id"] for b in dashboard.pending["pendingBookings"]] == ["bkg_1002"]

    export = dashboard.export_kpis(on=date(2024, 3, 9))
    assert "Total Users,4" in export.content


def test_first_poll_waits_after_dashboard_load():
    transport = RecordingTransport(
        envelope({"stats": {}, "recentBookings": []}),
        envelope(_activity_page(1, [])),
    )
    feed = ActivityFeed(transport.client(), interval=10.0, clock=lambda: 100.0)
    dashboard = DashboardAggregator(transport.client(), feed=feed)

    assert dashboard.load() is True
    assert len(transport.requests) == 2

    assert feed.poll() is False
    assert len(transport.requests) == 2

    assert feed.poll(now=110.5) is True
    assert len(transport.requests) == 3
