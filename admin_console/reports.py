"""Clients for the report and analytics endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from admin_console.admin_client import AdminClient
from admin_console.exports import REPORT_COLUMNS, CsvExport, export_report

GROUP_BY = ("day", "week", "month")
PERIODS = ("7d", "30d", "90d")


@dataclass(frozen=True)
class Report:
    report_type: str
    start_date: str
    end_date: str
    group_by: str
    rows: List[Dict[str, Any]]
    summary: Dict[str, Any] = field(default_factory=dict)

    def to_csv(self) -> CsvExport:
        return export_report(self.report_type, self.rows, self.start_date, self.end_date)


def fetch_report(
    client: AdminClient,
    report_type: str,
    start_date: str,
    end_date: str,
    group_by: str = "day",
) -> Report:
    """Fetch a revenue, bookings or activity report.

    Raises ``ValueError`` for unknown report types or groupings and
    :class:`~admin_console.admin_client.AdminAPIError` when the request fails.
    """
    if report_type not in REPORT_COLUMNS:
        raise ValueError(f"Unknown report type {report_type!r}")
    if group_by not in GROUP_BY:
        raise ValueError(f"groupBy must be one of {', '.join(GROUP_BY)}")
    response = client.get(
        f"/admin/reports/{report_type}",
        params={"startDate": start_date, "endDate": end_date, "groupBy": group_by},
    )
    data = response.get("data") or {}
    return Report(
        report_type=report_type,
        start_date=start_date,
        end_date=end_date,
        group_by=group_by,
        rows=list(data.get("data") or []),
        summary=dict(data.get("summary") or {}),
    )


def fetch_analytics(client: AdminClient, period: str = "30d") -> Dict[str, Any]:
    if period not in PERIODS:
        raise ValueError(f"period must be one of {', '.join(PERIODS)}")
    response = client.get("/admin/analytics", params={"period": period})
    return response.get("data") or {}
