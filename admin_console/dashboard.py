"""Dashboard statistics and the polled activity feed."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Optional, Tuple

from loguru import logger

from admin_console.admin_client import AdminAPIError, AdminClient
from admin_console.exports import DASHBOARD_METRICS, CsvExport, export_dashboard

ACTIVITY_ENDPOINT = "/admin/activity"
DEFAULT_POLL_SECONDS = 10.0

LOW_PRIORITY_EVENTS = frozenset(
    {
        "BOOKING_CREATED",
        "ACCOMMODATION_CREATED",
        "TRANSPORTATION_CREATED",
        "TOUR_CREATED",
        "USER_REGISTERED",
    }
)


def activity_priority(kind: str) -> str:
    if kind == "PAYMENT_FAILED":
        return "high"
    if kind in LOW_PRIORITY_EVENTS:
        return "low"
    return "medium"


def empty_stats() -> Dict[str, Any]:
    return {key: 0 for _, key in DASHBOARD_METRICS}


@dataclass(frozen=True)
class FeedTicket:
    epoch: int
    page: int
    manual: bool


class ActivityFeed:
    """Sole owner of activity feed fetches.

    Manual page changes and timed polls share one epoch counter: a manual
    change invalidates any poll still in flight, and polling is skipped while
    a manual change is pending.
    """

    def __init__(
        self,
        client: AdminClient,
        *,
        limit: int = 25,
        interval: float = DEFAULT_POLL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.limit = limit
        self.interval = interval
        self._clock = clock
        self.items: Tuple[Dict[str, Any], ...] = ()
        self.page = 1
        self.total_pages = 1
        self.total = 0
        self.error: Optional[str] = None
        self.last_polled: Optional[float] = None
        self._epoch = 0
        self._pending_manual: Optional[int] = None

    @property
    def navigation_pending(self) -> bool:
        return self._pending_manual is not None

    def _begin(self, page: int, manual: bool) -> Optional[FeedTicket]:
        if not self.client.has_token:
            return None
        self._epoch += 1
        if manual:
            self._pending_manual = self._epoch
        return FeedTicket(self._epoch, max(page, 1), manual)

    def begin_page(self, page: int) -> Optional[FeedTicket]:
        return self._begin(page, manual=True)

    def begin_poll(self, now: Optional[float] = None) -> Optional[FeedTicket]:
        """Start a poll if the interval has elapsed and no manual change is pending."""
        now = self._clock() if now is None else now
        if self.navigation_pending:
            return None
        if self.last_polled is not None and now - self.last_polled < self.interval:
            return None
        ticket = self._begin(self.page, manual=False)
        if ticket is not None:
            self.last_polled = now
        return ticket

    def fetch(self, ticket: FeedTicket) -> Dict[str, Any]:
        response = self.client.get(ACTIVITY_ENDPOINT, params={"page": ticket.page, "limit": self.limit})
        return response.get("data") or {}

    def complete(self, ticket: FeedTicket, data: Dict[str, Any]) -> bool:
        if ticket.manual and self._pending_manual == ticket.epoch:
            self._pending_manual = None
        if ticket.epoch != self._epoch:
            logger.warning(
                "Discarding stale activity response (epoch {epoch}, latest {latest})",
                epoch=ticket.epoch,
                latest=self._epoch,
            )
            return False
        pagination = data.get("pagination") or {}
        self.items = tuple(
            {**entry, "priority": activity_priority(entry.get("type", ""))}
            for entry in data.get("activity") or []
        )
        self.page = int(pagination.get("page", ticket.page))
        self.total_pages = max(int(pagination.get("totalPages", 1)), 1)
        self.total = int(pagination.get("total", len(self.items)))
        self.error = None
        if ticket.manual:
            # A fresh page counts as a poll.
            self.last_polled = self._clock()
        return True

    def fail(self, ticket: FeedTicket, err: AdminAPIError) -> None:
        if ticket.manual and self._pending_manual == ticket.epoch:
            self._pending_manual = None
        if ticket.epoch == self._epoch:
            self.error = f"Failed to load activity: {err.message}"
        logger.warning("Activity fetch failed: {error}", error=err.message)

    def _run(self, ticket: Optional[FeedTicket]) -> bool:
        if ticket is None:
            return False
        try:
            data = self.fetch(ticket)
        except AdminAPIError as exc:
            self.fail(ticket, exc)
            return False
        return self.complete(ticket, data)

    def go_to_page(self, page: int) -> bool:
        return self._run(self.begin_page(page))

    def poll(self, now: Optional[float] = None) -> bool:
        return self._run(self.begin_poll(now))


class DashboardAggregator:
    """Headline stats, recent bookings, the review queue and the activity feed."""

    def __init__(self, client: AdminClient, feed: Optional[ActivityFeed] = None):
        self.client = client
        self.feed = feed or ActivityFeed(client)
        self.stats: Dict[str, Any] = empty_stats()
        self.recent_bookings: Tuple[Dict[str, Any], ...] = ()
        self.pending: Dict[str, Any] = {}
        self.error: Optional[str] = None

    def load(self) -> bool:
        """Fetch stats and the first activity page; stats keep their last good value on failure."""
        if not self.client.has_token:
            return False
        try:
            response = self.client.get("/admin/dashboard")
        except AdminAPIError as exc:
            self.error = f"Failed to load dashboard: {exc.message}"
            logger.warning("Dashboard load failed: {error}", error=exc.message)
            loaded = False
        else:
            data = response.get("data") or {}
            self.stats = {**empty_stats(), **(data.get("stats") or {})}
            self.recent_bookings = tuple(data.get("recentBookings") or [])
            self.error = None
            loaded = True
        self.feed.go_to_page(1)
        return loaded

    def load_pending(self) -> bool:
        try:
            response = self.client.get("/admin/pending")
        except AdminAPIError as exc:
            self.error = f"Failed to load pending items: {exc.message}"
            return False
        self.pending = response.get("data") or {}
        return True

    def export_kpis(self, on: Optional[date] = None) -> CsvExport:
        return export_dashboard(self.stats, on)
