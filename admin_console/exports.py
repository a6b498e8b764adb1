"""CSV export of resource lists, reports and dashboard KPIs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd
from loguru import logger

from admin_console.admin_client import AdminClient
from admin_console.listing import ListQuery
from admin_console.resources import ResourceSpec

DEFAULT_EXPORT_LIMIT = 1000


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str
    row_count: int
    mime_type: str = "text/csv"


def to_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Serialise rows under ``headers``; fields with commas, quotes or newlines are quoted."""
    frame = pd.DataFrame(list(rows), columns=list(headers), dtype=object)
    return frame.to_csv(index=False, lineterminator="\n")


def export_filename(entity: str, on: Optional[date] = None) -> str:
    return f"{entity}-export-{(on or date.today()).isoformat()}.csv"


def export_resource(
    client: AdminClient,
    resource: ResourceSpec,
    query: ListQuery,
    *,
    limit: int = DEFAULT_EXPORT_LIMIT,
    on: Optional[date] = None,
) -> CsvExport:
    """Refetch ``query``'s filters and search from page 1 with a raised cap and encode as CSV.

    Raises :class:`~admin_console.admin_client.AdminAPIError` when the fetch fails.
    """
    response = client.get(resource.endpoint, params=query.to_params(resource, page=1, limit=limit))
    records = (response.get("data") or {}).get(resource.collection) or []
    display = [resource.mapper(record) for record in records]
    headers = [header for header, _ in resource.export_columns]
    rows = [[getter(record) for _, getter in resource.export_columns] for record in display]
    logger.info(
        "Exported {count} {resource} rows",
        count=len(rows),
        resource=resource.key,
    )
    return CsvExport(
        filename=export_filename(resource.key, on),
        content=to_csv(headers, rows),
        row_count=len(rows),
    )


REPORT_COLUMNS: Dict[str, Sequence[tuple]] = {
    "revenue": (("Date", "date"), ("Revenue", "revenue"), ("Bookings", "bookings")),
    "bookings": (
        ("Date", "date"),
        ("Total Bookings", "totalBookings"),
        ("Confirmed", "confirmedBookings"),
        ("Cancelled", "cancelledBookings"),
        ("Pending", "pendingBookings"),
        ("Revenue", "revenue"),
    ),
    "activity": (
        ("Date", "date"),
        ("Total Activities", "totalActivities"),
        ("User Registrations", "userRegistrations"),
        ("Bookings", "bookings"),
        ("Payments", "payments"),
        ("Content Creations", "contentCreations"),
    ),
}


def export_report(report_type: str, rows: List[Dict[str, Any]], start_date: str, end_date: str) -> CsvExport:
    columns = REPORT_COLUMNS[report_type]
    content = to_csv(
        [header for header, _ in columns],
        ([row.get(key) for _, key in columns] for row in rows),
    )
    return CsvExport(
        filename=f"{report_type}_report_{start_date}_{end_date}.csv",
        content=content,
        row_count=len(rows),
    )


DASHBOARD_METRICS = (
    ("Total Users", "totalUsers"),
    ("Total Accommodations", "totalAccommodations"),
    ("Total Tours", "totalTours"),
    ("Total Transportation", "totalTransportation"),
    ("Total Bookings", "totalBookings"),
    ("Total Revenue", "totalRevenue"),
    ("Pending Bookings", "pendingBookings"),
    ("Pending Trip Plans", "pendingTripPlans"),
    ("Unverified Accommodations", "unverifiedAccommodations"),
    ("Unverified Transportation", "unverifiedTransportation"),
)


def export_dashboard(stats: Dict[str, Any], on: Optional[date] = None) -> CsvExport:
    rows = [(label, stats.get(key, 0)) for label, key in DASHBOARD_METRICS]
    return CsvExport(
        filename=f"dashboard-report-{(on or date.today()).isoformat()}.csv",
        content=to_csv(("Metric", "Value"), rows),
        row_count=len(rows),
    )
