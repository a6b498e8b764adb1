"""Report and analytics aggregation over the mock store."""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, Optional, Tuple

from admin_backend.app.services.mock_store import MockAdminStore

ANALYTICS_PERIODS = {"7d": 7, "30d": 30, "90d": 90}
CREATION_EVENTS = ("ACCOMMODATION_CREATED", "TRANSPORTATION_CREATED", "TOUR_CREATED")


class ReportRangeError(ValueError):
    """Raised when report dates are missing or inverted."""


def parse_range(start_date: Optional[str], end_date: Optional[str]) -> Tuple[date, date]:
    if not start_date or not end_date:
        raise ReportRangeError("Start date and end date are required")
    try:
        start = date.fromisoformat(start_date[:10])
        end = date.fromisoformat(end_date[:10])
    except ValueError as exc:
        raise ReportRangeError("Invalid date range") from exc
    if start > end:
        raise ReportRangeError("Invalid date range")
    return start, end


def bucket_key(day: date, group_by: str) -> str:
    """Return the bucket label for ``day``; weeks start on Sunday."""
    if group_by == "week":
        return (day - timedelta(days=(day.weekday() + 1) % 7)).isoformat()
    if group_by == "month":
        return day.strftime("%Y-%m")
    return day.isoformat()


def _buckets(start: date, end: date, group_by: str, factory: Callable[[str], Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    buckets: Dict[str, Dict[str, Any]] = {}
    day = start
    while day <= end:
        key = bucket_key(day, group_by)
        if key not in buckets:
            buckets[key] = factory(key)
        day += timedelta(days=1)
    return buckets


def _day(timestamp: Optional[str]) -> Optional[date]:
    if not timestamp:
        return None
    return datetime.fromisoformat(timestamp).date()


def _in_range(timestamp: Optional[str], start: date, end: date) -> Optional[date]:
    day = _day(timestamp)
    if day is None or not start <= day <= end:
        return None
    return day


def revenue_report(
    store: MockAdminStore, start_date: Optional[str], end_date: Optional[str], group_by: str = "day"
) -> Dict[str, Any]:
    start, end = parse_range(start_date, end_date)
    buckets = _buckets(start, end, group_by, lambda key: {"date": key, "revenue": 0.0, "bookings": 0})
    for payment in store.payments:
        day = _in_range(payment["createdAt"], start, end)
        if day is not None and payment["status"] == "COMPLETED":
            bucket = buckets[bucket_key(day, group_by)]
            bucket["revenue"] += payment["amount"]
            bucket["bookings"] += 1
    rows = list(buckets.values())
    total_revenue = sum(row["revenue"] for row in rows)
    total_bookings = sum(row["bookings"] for row in rows)
    return {
        "data": rows,
        "summary": {
            "totalRevenue": total_revenue,
            "totalBookings": total_bookings,
            "averageRevenue": total_revenue / total_bookings if total_bookings else 0,
            "dateRange": {"startDate": start.isoformat(), "endDate": end.isoformat()},
        },
    }


def bookings_report(
    store: MockAdminStore, start_date: Optional[str], end_date: Optional[str], group_by: str = "day"
) -> Dict[str, Any]:
    start, end = parse_range(start_date, end_date)
    buckets = _buckets(
        start,
        end,
        group_by,
        lambda key: {
            "date": key,
            "totalBookings": 0,
            "confirmedBookings": 0,
            "cancelledBookings": 0,
            "pendingBookings": 0,
            "revenue": 0.0,
        },
    )
    for booking in store.bookings:
        day = _in_range(booking["createdAt"], start, end)
        if day is None:
            continue
        bucket = buckets[bucket_key(day, group_by)]
        bucket["totalBookings"] += 1
        status = booking["status"]
        if status in ("CONFIRMED", "COMPLETED"):
            bucket["confirmedBookings"] += 1
            bucket["revenue"] += booking["totalAmount"]
        elif status == "CANCELLED":
            bucket["cancelledBookings"] += 1
        elif status == "PENDING":
            bucket["pendingBookings"] += 1
    rows = list(buckets.values())
    return {
        "data": rows,
        "summary": {
            "totalBookings": sum(row["totalBookings"] for row in rows),
            "totalRevenue": sum(row["revenue"] for row in rows),
            "dateRange": {"startDate": start.isoformat(), "endDate": end.isoformat()},
        },
    }


def activity_report(
    store: MockAdminStore, start_date: Optional[str], end_date: Optional[str], group_by: str = "day"
) -> Dict[str, Any]:
    start, end = parse_range(start_date, end_date)
    buckets = _buckets(
        start,
        end,
        group_by,
        lambda key: {
            "date": key,
            "totalActivities": 0,
            "userRegistrations": 0,
            "bookings": 0,
            "payments": 0,
            "contentCreations": 0,
        },
    )
    for entry in store.activity_log:
        day = _in_range(entry["timestamp"], start, end)
        if day is None:
            continue
        bucket = buckets[bucket_key(day, group_by)]
        bucket["totalActivities"] += 1
        kind = entry["type"]
        if kind == "USER_REGISTERED":
            bucket["userRegistrations"] += 1
        elif kind.startswith("BOOKING_"):
            bucket["bookings"] += 1
        elif kind.startswith("PAYMENT_"):
            bucket["payments"] += 1
        elif kind in CREATION_EVENTS:
            bucket["contentCreations"] += 1
    rows = list(buckets.values())
    return {
        "data": rows,
        "summary": {
            "totalActivities": sum(row["totalActivities"] for row in rows),
            "dateRange": {"startDate": start.isoformat(), "endDate": end.isoformat()},
        },
    }


REPORTS: Dict[str, Callable[..., Dict[str, Any]]] = {
    "revenue": revenue_report,
    "bookings": bookings_report,
    "activity": activity_report,
}


def analytics(store: MockAdminStore, period: str, today: Optional[date] = None) -> Dict[str, Any]:
    """Summarise bookings, revenue, services and user growth for ``period``."""
    days = ANALYTICS_PERIODS.get(period, 30)
    end = today or date.today()
    start = end - timedelta(days=days - 1)
    labels = [(start + timedelta(days=offset)).isoformat() for offset in range(days)]

    bookings_by_day: Counter = Counter()
    revenue_by_day: Counter = Counter()
    users_by_day: Counter = Counter()
    services: Counter = Counter()
    for booking in store.bookings:
        day = _in_range(booking["createdAt"], start, end)
        if day is None:
            continue
        bookings_by_day[day.isoformat()] += 1
        services[booking["serviceType"]] += 1
    for payment in store.payments:
        day = _in_range(payment["createdAt"], start, end)
        if day is not None and payment["status"] == "COMPLETED":
            revenue_by_day[day.isoformat()] += payment["amount"]
    for user in store.users:
        day = _in_range(user["createdAt"], start, end)
        if day is not None:
            users_by_day[day.isoformat()] += 1

    total_bookings = sum(bookings_by_day.values())
    total_revenue = float(sum(revenue_by_day.values()))
    total_users = sum(users_by_day.values())
    top = services.most_common()
    paid = sum(1 for p in store.payments if p["status"] == "COMPLETED" and _in_range(p["createdAt"], start, end))
    return {
        "period": period,
        "dateRange": {"startDate": start.isoformat(), "endDate": end.isoformat()},
        "bookings": {
            "trend": [{"label": label, "bookings": bookings_by_day[label]} for label in labels],
            "total": total_bookings,
        },
        "revenue": {
            "trend": [{"label": label, "revenue": float(revenue_by_day[label])} for label in labels],
            "total": total_revenue,
            "average": total_revenue / days,
        },
        "services": {
            "split": [{"name": name, "value": count} for name, count in top],
            "top": [{"serviceType": name, "bookings": count} for name, count in top],
        },
        "users": {
            "growth": [{"label": label, "users": users_by_day[label]} for label in labels],
            "total": total_users,
        },
        "metrics": {
            "conversionRate": round(paid / total_bookings * 100, 1) if total_bookings else 0,
            "averageBookingValue": total_revenue / paid if paid else 0,
            "topService": top[0][0] if top else None,
        },
    }
