from datetime import date, timedelta

import pytest

from admin_console.admin_client import AdminAPIError
from admin_console.help_center import HelpCenterClient
from admin_console.reports import fetch_analytics, fetch_report


def test_bookings_report_by_month(admin_client):
    end = date.today()
    start = end - timedelta(days=40)
    report = fetch_report(admin_client, "bookings", start.isoformat(), end.isoformat(), "month")

    assert sum(row["totalBookings"] for row in report.rows) == 4
    assert sum(row["cancelledBookings"] for row in report.rows) == 1
    assert all(len(row["date"]) == 7 for row in report.rows)

    export = report.to_csv()
    assert export.filename == f"bookings_report_{start.isoformat()}_{end.isoformat()}.csv"
    assert export.content.splitlines()[0] == "Date,Total Bookings,Confirmed,Cancelled,Pending,Revenue"


def test_report_errors_surface_server_message(admin_client):
    with pytest.raises(AdminAPIError) as excinfo:
        fetch_report(admin_client, "revenue", "2024-05-01", "2024-04-01")
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Invalid date range"

    with pytest.raises(ValueError):
        fetch_report(admin_client, "profit", "2024-01-01", "2024-01-02")


def test_analytics_shape(admin_client):
    data = fetch_analytics(admin_client, "7d")

    assert data["period"] == "7d"
    assert len(data["bookings"]["trend"]) == 7
    assert data["bookings"]["total"] == 2
    assert data["metrics"]["topService"] in {"TOUR", "ACCOMMODATION", "TRANSPORTATION"}
    assert {"split", "top"} <= set(data["services"])


def test_help_center_flow(admin_client):
    help_center = HelpCenterClient(admin_client)

    categories = help_center.categories()
    assert [c["id"] for c in categories] == ["hcat_start", "hcat_book"]
    assert categories[0]["_count"]["articles"] == 1

    article = help_center.create_article(
        {"title": "Exporting users", "content": "Use the export button.", "categoryId": "hcat_start", "tags": ["export"]}
    )
    assert [a["id"] for a in help_center.articles(category="hcat_start", search="export")] == [article["id"]]

    help_center.update_article(article["id"], {**article, "title": "Exporting lists"})
    assert help_center.article(article["id"])["title"] == "Exporting lists"
    help_center.delete_article(article["id"])
    with pytest.raises(AdminAPIError) as excinfo:
        help_center.article(article["id"])
    assert excinfo.value.status_code == 404

    ticket = help_center.submit_ticket("Slow dashboard", "Stats take a while", priority="HIGH")
    listing = help_center.tickets(status="all", priority="HIGH")
    assert ticket["id"] in [t["id"] for t in listing["tickets"]]
    assert listing["pagination"]["total"] == 2

    diagnostics = help_center.diagnostics()
    assert diagnostics["database"]["userCount"] == 4
