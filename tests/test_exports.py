import csv
import io
import re
from datetime import date

from admin_console.exports import export_dashboard, export_filename, export_report, export_resource, to_csv
from admin_console.listing import ListQuery
from admin_console.resources import BOOKINGS, USERS

from helpers import RecordingTransport, envelope, list_payload


def _rows(content):
    return list(csv.reader(io.StringIO(content)))


def test_to_csv_quotes_awkward_values():
    content = to_csv(
        ["Name", "Note"],
        [["O'Neil, Jr.", 'he said "hi"'], ["Multi", "line one\nline two"]],
    )
    assert _rows(content) == [
        ["Name", "Note"],
        ["O'Neil, Jr.", 'he said "hi"'],
        ["Multi", "line one\nline two"],
    ]
    assert '"he said ""hi"""' in content


def test_export_filename_pattern():
    assert export_filename("users", date(2024, 3, 9)) == "users-export-2024-03-09.csv"


def test_export_refetches_from_page_one_with_cap():
    users = [
        {"id": f"u{i}", "firstName": "A", "lastName": str(i), "email": f"{i}@x.io", "role": "USER",
         "isActive": True, "isVerified": i % 2 == 0, "createdAt": "2024-01-02T00:00:00+00:00"}
        for i in range(30)
    ]
    transport = RecordingTransport(envelope(list_payload("users", users, per_page=1000)))
    query = ListQuery(page=3, page_size=20, filters={"role": "USER"}, search="a")

    export = export_resource(transport.client(), USERS, query, on=date(2024, 3, 9))

    params = transport.params()
    assert params["page"] == "1"
    assert params["limit"] == "1000"
    assert params["role"] == "USER"
    assert params["search"] == "a"
    assert export.row_count == 30
    assert len(_rows(export.content)) == 31
    assert export.filename == "users-export-2024-03-09.csv"
    assert export.mime_type == "text/csv"


def test_user_export_against_mock_api(admin_client):
    export = export_resource(admin_client, USERS, ListQuery(page=2, page_size=1))
    rows = _rows(export.content)

    assert rows[0] == [
        "ID", "Name", "Email", "Phone", "Role", "Status", "Verified", "Nationality", "Language", "Created Date",
    ]
    assert export.row_count == 4
    assert re.fullmatch(r"users-export-\d{4}-\d{2}-\d{2}\.csv", export.filename)
    sarah = next(row for row in rows if row[0] == "usr_sarah")
    assert sarah[1] == "Sarah O'Neil, Jr."
    assert sarah[3] == "N/A"
    assert sarah[6] == "No"
    gorilla = next(row for row in rows if row[0] == "usr_gorilla")
    assert gorilla[5] == "Suspended"


def test_booking_export_respects_filters(admin_client):
    query = ListQuery(page_size=20).with_filter("status", "CONFIRMED")
    export = export_resource(admin_client, BOOKINGS, query)
    rows = _rows(export.content)

    assert export.row_count == 1
    assert rows[1][0] == "bkg_1001"
    assert rows[1][7] == "540000.0 RWF"
    assert rows[1][10] == "Late check-in, after 22:00"


def test_report_and_dashboard_exports():
    report = export_report(
        "revenue",
        [{"date": "2024-01-01", "revenue": 10.0, "bookings": 1}],
        "2024-01-01",
        "2024-01-31",
    )
    assert report.filename == "revenue_report_2024-01-01_2024-01-31.csv"
    assert _rows(report.content) == [["Date", "Revenue", "Bookings"], ["2024-01-01", "10.0", "1"]]

    dashboard = export_dashboard({"totalUsers": 4, "totalRevenue": 570000.0}, on=date(2024, 3, 9))
    rows = _rows(dashboard.content)
    assert dashboard.filename == "dashboard-report-2024-03-09.csv"
    assert rows[0] == ["Metric", "Value"]
    assert ["Total Users", "4"] in rows
    assert ["Pending Bookings", "0"] in rows
