"""Paginated, filtered resource lists.

A :class:`ListController` owns the query, the last good :class:`Page` and the
fetch state for one management screen. Every fetch is tagged with an epoch;
only the response for the latest epoch is applied.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from loguru import logger

from admin_console.admin_client import AdminAPIError, AdminClient
from admin_console.resources import ResourceSpec


class ListState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


@dataclass(frozen=True)
class ListQuery:
    """Page, page size, filters and search term for a list request.

    Changing filters or search always lands back on page 1.
    """

    page: int = 1
    page_size: int = 20
    filters: Mapping[str, Any] = field(default_factory=dict)
    search: str = ""

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.page_size < 1:
            raise ValueError("page_size must be > 0")

    def with_filter(self, name: str, value: Any) -> "ListQuery":
        return replace(self, filters={**self.filters, name: value}, page=1)

    def with_search(self, term: str) -> "ListQuery":
        return replace(self, search=term, page=1)

    def reset_filters(self) -> "ListQuery":
        return replace(self, filters={}, search="", page=1)

    def with_page(self, page: int) -> "ListQuery":
        return replace(self, page=max(page, 1))

    def to_params(self, spec: ResourceSpec, *, page: Optional[int] = None, limit: Optional[int] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "page": page or self.page,
            "limit": limit or self.page_size,
        }
        if self.search.strip():
            params["search"] = self.search.strip()
        params.update(spec.filter_params(self.filters))
        return params


@dataclass(frozen=True)
class Page:
    items: Tuple[Dict[str, Any], ...] = ()
    page: int = 1
    total_pages: int = 0
    total_items: int = 0
    page_size: int = 20

    def __post_init__(self) -> None:
        items = tuple(self.items)
        if len(items) > self.page_size:
            items = items[: self.page_size]
        object.__setattr__(self, "items", items)

    @classmethod
    def from_response(cls, data: Mapping[str, Any], spec: ResourceSpec, page_size: int) -> "Page":
        """Build a page from a list endpoint's ``data`` payload."""
        records = data.get(spec.collection) or []
        pagination = data.get("pagination") or {}
        return cls(
            items=tuple(spec.mapper(record) for record in records[:page_size]),
            page=int(pagination.get("currentPage", 1)),
            total_pages=int(pagination.get("totalPages", 0)),
            total_items=int(pagination.get("totalItems", len(records))),
            page_size=page_size,
        )


@dataclass(frozen=True)
class FetchTicket:
    epoch: int
    query: ListQuery


class ListController:
    """Fetch state for one resource screen."""

    def __init__(self, client: AdminClient, spec: ResourceSpec, query: Optional[ListQuery] = None):
        self.client = client
        self.spec = spec
        self.query = query or ListQuery(page_size=spec.page_size)
        self.page = Page(page_size=self.query.page_size)
        self.state = ListState.IDLE
        self.error: Optional[str] = None
        self._epoch = 0

    @property
    def current_page(self) -> int:
        return self.query.page

    @property
    def is_empty(self) -> bool:
        return self.state is ListState.LOADED and self.page.total_items == 0

    # --- Fetch lifecycle ---

    def begin_fetch(self) -> Optional[FetchTicket]:
        """Issue a ticket for the current query, or ``None`` without a token."""
        if not self.client.has_token:
            logger.debug("Skipping {resource} fetch: no token", resource=self.spec.key)
            return None
        self._epoch += 1
        self.state = ListState.LOADING
        return FetchTicket(self._epoch, self.query)

    def fetch(self, ticket: FetchTicket) -> Page:
        response = self.client.get(self.spec.endpoint, params=ticket.query.to_params(self.spec))
        data = response.get("data") or {}
        try:
            return Page.from_response(data, self.spec, ticket.query.page_size)
        except (KeyError, TypeError, ValueError) as exc:
            raise AdminAPIError(
                f"Malformed {self.spec.label.lower()} response", payload=data, kind="envelope"
            ) from exc

    def complete_fetch(self, ticket: FetchTicket, page: Page) -> bool:
        if ticket.epoch != self._epoch:
            logger.warning(
                "Discarding stale {resource} response (epoch {epoch}, latest {latest})",
                resource=self.spec.key,
                epoch=ticket.epoch,
                latest=self._epoch,
            )
            return False
        self.page = page
        self.state = ListState.LOADED
        self.error = None
        return True

    def fail_fetch(self, ticket: FetchTicket, err: Exception) -> bool:
        """Record a failure; the previously loaded page stays on screen."""
        if ticket.epoch != self._epoch:
            logger.warning(
                "Ignoring stale {resource} failure: {error}", resource=self.spec.key, error=err
            )
            return False
        message = err.message if isinstance(err, AdminAPIError) else str(err)
        self.state = ListState.ERRORED
        self.error = f"Failed to load {self.spec.label.lower()}: {message}"
        logger.warning("{resource} fetch failed: {error}", resource=self.spec.key, error=message)
        return True

    def refresh(self) -> bool:
        ticket = self.begin_fetch()
        if ticket is None:
            return False
        try:
            page = self.fetch(ticket)
        except AdminAPIError as exc:
            self.fail_fetch(ticket, exc)
            return False
        return self.complete_fetch(ticket, page)

    # --- Query changes ---

    def set_filter(self, name: str, value: Any) -> bool:
        self.query = self.query.with_filter(name, value)
        return self.refresh()

    def set_search(self, term: str) -> bool:
        self.query = self.query.with_search(term)
        return self.refresh()

    def reset_filters(self) -> bool:
        self.query = self.query.reset_filters()
        return self.refresh()

    def go_to_page(self, page: int) -> bool:
        if self.page.total_pages:
            page = min(page, self.page.total_pages)
        self.query = self.query.with_page(page)
        return self.refresh()

    def next_page(self) -> bool:
        return self.go_to_page(self.query.page + 1)

    def previous_page(self) -> bool:
        return self.go_to_page(self.query.page - 1)

    # --- Mutations ---

    def set_flag(self, record_id: str, field_name: str, value: Any) -> Optional[str]:
        """Send a flag change and patch the record once the server accepts it.

        Returns an error message on failure, ``None`` on success. The page's
        items tuple is replaced; untouched records keep their identity.
        """
        try:
            self.client.put(self.spec.flag_path(record_id, field_name), json={field_name: value})
        except AdminAPIError as exc:
            logger.warning(
                "Updating {field} on {resource} {record_id} failed: {error}",
                field=field_name,
                resource=self.spec.key,
                record_id=record_id,
                error=exc.message,
            )
            return exc.message
        items = tuple(
            {**record, field_name: value} if record["id"] == record_id else record
            for record in self.page.items
        )
        self.page = replace(self.page, items=items)
        return None

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.post(self.spec.endpoint, json=payload)

    def update(self, record_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.put(f"{self.spec.endpoint}/{record_id}", json=payload)

    def delete(self, record_id: str) -> Optional[str]:
        """Delete a record and refetch; returns an error message on failure."""
        try:
            self.client.delete(f"{self.spec.endpoint}/{record_id}")
        except AdminAPIError as exc:
            logger.warning(
                "Deleting {resource} {record_id} failed: {error}",
                resource=self.spec.key,
                record_id=record_id,
                error=exc.message,
            )
            return exc.message
        self.refresh()
        return None
