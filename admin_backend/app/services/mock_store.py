"""In-memory store mimicking the travel platform's admin database."""

from __future__ import annotations

import random
import string
from datetime import datetime, timezone
from math import ceil
from typing import Any, Dict, Iterable, List, Optional, Tuple

from loguru import logger

from admin_backend.app.config import Settings
from admin_backend.app.services.demo_data import build_demo_data

LISTING_KINDS = ("accommodations", "transportation", "tours")
ACTIVE_BOOKING_STATUSES = ("PENDING", "CONFIRMED")


class RecordNotFound(LookupError):
    """Raised when a record id does not exist in the store."""

    def __init__(self, entity: str, record_id: str):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} not found")


class StoreConflict(ValueError):
    """Raised when a mutation would break a store rule."""


def _random_id(prefix: str) -> str:
    token = "".join(random.choices(string.ascii_lowercase + string.digits, k=8))
    return f"{prefix}_{token}"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _contains(needle: str, *values: Any) -> bool:
    needle = needle.lower()
    return any(needle in str(value or "").lower() for value in values)


def paginate(
    items: List[Dict[str, Any]], page: int, limit: int
) -> Tuple[List[Dict[str, Any]], Dict[str, int]]:
    """Slice a result list and build list-endpoint pagination metadata."""
    total = len(items)
    start = (page - 1) * limit
    return items[start : start + limit], {
        "currentPage": page,
        "totalPages": ceil(total / limit) if limit else 1,
        "totalItems": total,
        "itemsPerPage": limit,
    }


def _newest_first(items: Iterable[Dict[str, Any]], key: str = "createdAt") -> List[Dict[str, Any]]:
    return sorted(items, key=lambda item: item.get(key) or "", reverse=True)


class MockAdminStore:
    """Collections of platform records with the queries the admin API needs."""

    def __init__(self, settings: Settings):
        self._settings = settings
        if settings.seed_demo_data:
            data = build_demo_data(currency=settings.default_currency)
        else:
            data = {}
        self.locations: List[Dict[str, Any]] = data.get("locations", [])
        self.users: List[Dict[str, Any]] = data.get("users", [])
        self.bookings: List[Dict[str, Any]] = data.get("bookings", [])
        self.payments: List[Dict[str, Any]] = data.get("payments", [])
        self.listings: Dict[str, List[Dict[str, Any]]] = {
            kind: data.get(kind, []) for kind in LISTING_KINDS
        }
        self.settings: List[Dict[str, Any]] = data.get("settings", [])
        self.help_categories: List[Dict[str, Any]] = data.get("help_categories", [])
        self.help_articles: List[Dict[str, Any]] = data.get("help_articles", [])
        self.support_tickets: List[Dict[str, Any]] = data.get("support_tickets", [])
        self.activity_log: List[Dict[str, Any]] = data.get("activity", [])
        logger.debug(
            "Mock store ready with {users} users and {bookings} bookings",
            users=len(self.users),
            bookings=len(self.bookings),
        )

    # --- Lookups ---

    def _find(self, collection: List[Dict[str, Any]], record_id: str, entity: str) -> Dict[str, Any]:
        for record in collection:
            if record["id"] == record_id:
                return record
        raise RecordNotFound(entity, record_id)

    def _location(self, location_id: Optional[str]) -> Optional[Dict[str, Any]]:
        return next((loc for loc in self.locations if loc["id"] == location_id), None)

    def _service(self, service_type: str, service_id: str) -> Optional[Dict[str, Any]]:
        kind = {
            "ACCOMMODATION": "accommodations",
            "TRANSPORTATION": "transportation",
            "TOUR": "tours",
        }.get(service_type)
        if kind is None:
            return None
        return next((item for item in self.listings[kind] if item["id"] == service_id), None)

    # --- Users ---

    def list_users(
        self,
        *,
        page: int,
        limit: int,
        search: Optional[str] = None,
        role: Optional[str] = None,
        is_verified: Optional[bool] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[Dict[str, Any]], Dict[str, int]]:
        results = self.users
        if search:
            results = [u for u in results if _contains(search, u["firstName"], u["lastName"], u["email"])]
        if role:
            results = [u for u in results if u["role"] == role]
        if is_verified is not None:
            results = [u for u in results if u["isVerified"] is is_verified]
        if is_active is not None:
            results = [u for u in results if u["isActive"] is is_active]
        return paginate(_newest_first(results), page, limit)

    def create_user(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if any(u["email"].lower() == payload["email"].lower() for u in self.users):
            raise StoreConflict("Email already in use")
        user = {
            "id": _random_id("usr"),
            "nationality": None,
            "language": "en",
            "lastLogin": None,
            **payload,
            "createdAt": _now(),
        }
        self.users.append(user)
        return user

    def update_user_status(self, user_id: str, changes: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """Apply status changes and return ``(previous, updated)`` snapshots."""
        user = self._find(self.users, user_id, "User")
        previous = dict(user)
        user.update(changes)
        user["updatedAt"] = _now()
        return previous, dict(user)

    def delete_user(self, user_id: str) -> Dict[str, Any]:
        user = self._find(self.users, user_id, "User")
        if any(
            b["userId"] == user_id and b["status"] in ACTIVE_BOOKING_STATUSES for b in self.bookings
        ):
            raise StoreConflict(
                "Cannot delete user with active bookings. Please deactivate instead."
            )
        self.users.remove(user)
        return user

    # --- Bookings ---

    def _booking_view(self, booking: Dict[str, Any]) -> Dict[str, Any]:
        user = next((u for u in self.users if u["id"] == booking["userId"]), None)
        service = self._service(booking["serviceType"], booking["serviceId"])
        payment = next((p for p in self.payments if p["bookingId"] == booking["id"]), None)
        view = dict(booking)
        view["user"] = (
            {"firstName": user["firstName"], "lastName": user["lastName"], "email": user["email"]}
            if user
            else None
        )
        for service_type, key in (
            ("ACCOMMODATION", "accommodation"),
            ("TRANSPORTATION", "transportation"),
            ("TOUR", "tour"),
        ):
            if booking["serviceType"] == service_type and service:
                view[key] = {"name": service["name"], "type": service["type"]}
            else:
                view[key] = None
        view["payment"] = (
            {"status": payment["status"], "amount": payment["amount"]} if payment else None
        )
        return view

    def list_bookings(
        self,
        *,
        page: int,
        limit: int,
        status: Optional[str] = None,
        service_type: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Dict[str, Any]], Dict[str, int]]:
        results = [self._booking_view(b) for b in self.bookings]
        if status:
            results = [b for b in results if b["status"] == status]
        if service_type:
            results = [b for b in results if b["serviceType"] == service_type]
        if start_date and end_date:
            results = [b for b in results if start_date <= b["createdAt"][:10] <= end_date]
        if search:
            results = [b for b in results if _contains(search, *_booking_search_fields(b))]
        return paginate(_newest_first(results), page, limit)

    def update_booking_status(self, booking_id: str, status: str) -> Tuple[str, Dict[str, Any]]:
        booking = self._find(self.bookings, booking_id, "Booking")
        previous = booking["status"]
        booking["status"] = status
        booking["isConfirmed"] = status == "CONFIRMED"
        booking["updatedAt"] = _now()
        return previous, self._booking_view(booking)

    # --- Listings ---

    def _listing_view(self, item: Dict[str, Any]) -> Dict[str, Any]:
        view = dict(item)
        view["location"] = self._location(item.get("locationId"))
        return view

    def list_listings(
        self,
        kind: str,
        *,
        page: int,
        limit: int,
        search: Optional[str] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Tuple[List[Dict[str, Any]], Dict[str, int]]:
        results = self.listings[kind]
        if search:
            results = [item for item in results if _contains(search, item["name"], item.get("description"))]
        for field, value in (filters or {}).items():
            if value is None or value == "":
                continue
            results = [item for item in results if item.get(field) == value]
        return paginate([self._listing_view(i) for i in _newest_first(results)], page, limit)

    def create_listing(self, kind: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._check_location(payload.get("locationId"))
        item = {
            "id": _random_id(kind[:3]),
            **payload,
            "isVerified": False,
            "createdAt": _now(),
        }
        self.listings[kind].append(item)
        return self._listing_view(item)

    def update_listing(self, kind: str, item_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        item = self._find(self.listings[kind], item_id, _entity_label(kind))
        self._check_location(payload.get("locationId"))
        item.update(payload)
        item["updatedAt"] = _now()
        return self._listing_view(item)

    def delete_listing(self, kind: str, item_id: str) -> Dict[str, Any]:
        item = self._find(self.listings[kind], item_id, _entity_label(kind))
        service_type = {"accommodations": "ACCOMMODATION", "transportation": "TRANSPORTATION", "tours": "TOUR"}[kind]
        if any(
            b["serviceType"] == service_type
            and b["serviceId"] == item_id
            and b["status"] in ACTIVE_BOOKING_STATUSES
            for b in self.bookings
        ):
            raise StoreConflict(f"Cannot delete {_entity_label(kind).lower()} with active bookings")
        self.listings[kind].remove(item)
        return item

    def verify_listing(self, kind: str, item_id: str, is_verified: bool) -> Tuple[bool, Dict[str, Any]]:
        item = self._find(self.listings[kind], item_id, _entity_label(kind))
        previous = item["isVerified"]
        item["isVerified"] = is_verified
        return previous, self._listing_view(item)

    def _check_location(self, location_id: Optional[str]) -> None:
        if location_id and self._location(location_id) is None:
            raise StoreConflict("Unknown location")

    # --- Dashboard ---

    def dashboard(self) -> Dict[str, Any]:
        completed = [p["amount"] for p in self.payments if p["status"] == "COMPLETED"]
        stats = {
            "totalUsers": len(self.users),
            "totalAccommodations": len(self.listings["accommodations"]),
            "totalTours": len(self.listings["tours"]),
            "totalTransportation": len(self.listings["transportation"]),
            "totalBookings": len(self.bookings),
            "totalRevenue": sum(completed),
            "pendingBookings": sum(1 for b in self.bookings if b["status"] == "PENDING"),
            "pendingTripPlans": 0,
            "unverifiedAccommodations": sum(
                1 for a in self.listings["accommodations"] if not a["isVerified"]
            ),
            "unverifiedTransportation": sum(
                1 for t in self.listings["transportation"] if not t["isVerified"]
            ),
        }
        recent = [self._booking_view(b) for b in _newest_first(self.bookings)[:5]]
        return {"stats": stats, "recentBookings": recent}

    def pending(self, limit: int = 25) -> Dict[str, Any]:
        pending_bookings = [
            self._booking_view(b) for b in _newest_first(self.bookings) if b["status"] == "PENDING"
        ]
        return {
            "pendingBookings": pending_bookings[:limit],
            "pendingTripPlans": [],
            "unverifiedAccommodations": [
                self._listing_view(a)
                for a in _newest_first(self.listings["accommodations"])
                if not a["isVerified"]
            ][:limit],
            "unverifiedTransportation": [
                self._listing_view(t)
                for t in _newest_first(self.listings["transportation"])
                if not t["isVerified"]
            ][:limit],
        }

    def activity_page(self, *, page: int, limit: int) -> Dict[str, Any]:
        ordered = _newest_first(self.activity_log, key="timestamp")
        total = len(ordered)
        start = (page - 1) * limit
        return {
            "activity": ordered[start : start + limit],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "totalPages": max(ceil(total / limit), 1),
            },
        }

    # --- Settings ---

    def list_settings(self) -> List[Dict[str, Any]]:
        return sorted((dict(s) for s in self.settings), key=lambda s: s["key"])

    def upsert_setting(self, key: str, value: str, description: Optional[str] = None) -> Dict[str, Any]:
        for setting in self.settings:
            if setting["key"] == key:
                setting["value"] = value
                setting["description"] = description or setting.get("description")
                setting["updatedAt"] = _now()
                return dict(setting)
        setting = {"key": key, "value": value, "description": description, "updatedAt": _now()}
        self.settings.append(setting)
        return dict(setting)

    def update_setting(self, key: str, value: str, description: Optional[str] = None) -> Dict[str, Any]:
        self._find_setting(key)
        return self.upsert_setting(key, value, description)

    def _find_setting(self, key: str) -> Dict[str, Any]:
        for setting in self.settings:
            if setting["key"] == key:
                return setting
        raise RecordNotFound("Setting", key)

    # --- Help center ---

    def list_help_categories(self) -> List[Dict[str, Any]]:
        categories = []
        for category in sorted(self.help_categories, key=lambda c: c["order"]):
            count = sum(1 for a in self.help_articles if a["categoryId"] == category["id"])
            categories.append({**category, "_count": {"articles": count}})
        return categories

    def create_help_category(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        category = {"id": _random_id("hcat"), **payload}
        self.help_categories.append(category)
        return category

    def _article_view(self, article: Dict[str, Any]) -> Dict[str, Any]:
        category = next((c for c in self.help_categories if c["id"] == article["categoryId"]), None)
        return {**article, "category": category}

    def list_help_articles(
        self, *, category: Optional[str] = None, search: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        results = self.help_articles
        if category and category != "all":
            results = [a for a in results if a["categoryId"] == category]
        if search:
            results = [
                a
                for a in results
                if _contains(search, a["title"], a["content"]) or search in a.get("tags", [])
            ]
        return [self._article_view(a) for a in sorted(results, key=lambda a: a["order"])]

    def get_help_article(self, article_id: str) -> Dict[str, Any]:
        return self._article_view(self._find(self.help_articles, article_id, "Help article"))

    def create_help_article(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._find(self.help_categories, payload["categoryId"], "Help category")
        article = {
            "id": _random_id("hart"),
            **payload,
            "viewCount": 0,
            "createdAt": _now(),
            "updatedAt": _now(),
        }
        self.help_articles.append(article)
        return self._article_view(article)

    def update_help_article(self, article_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        article = self._find(self.help_articles, article_id, "Help article")
        self._find(self.help_categories, payload["categoryId"], "Help category")
        article.update(payload)
        article["updatedAt"] = _now()
        return self._article_view(article)

    def delete_help_article(self, article_id: str) -> Dict[str, Any]:
        article = self._find(self.help_articles, article_id, "Help article")
        self.help_articles.remove(article)
        return article

    def list_support_tickets(
        self,
        *,
        page: int,
        limit: int,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Dict[str, Any]:
        results = self.support_tickets
        for field, value in (("status", status), ("priority", priority), ("category", category)):
            if value and value != "all":
                results = [t for t in results if t[field] == value]
        results = _newest_first(results)
        total = len(results)
        start = (page - 1) * limit
        tickets = [self._ticket_view(t) for t in results[start : start + limit]]
        return {
            "tickets": tickets,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": ceil(total / limit) if limit else 1,
            },
        }

    def _ticket_view(self, ticket: Dict[str, Any]) -> Dict[str, Any]:
        def person(user_id: Optional[str]) -> Optional[Dict[str, Any]]:
            user = next((u for u in self.users if u["id"] == user_id), None)
            if user is None:
                return None
            return {"firstName": user["firstName"], "lastName": user["lastName"], "email": user["email"]}

        return {
            **ticket,
            "submittedByUser": person(ticket.get("submittedBy")),
            "assignedToUser": person(ticket.get("assignedTo")),
        }

    def create_support_ticket(self, payload: Dict[str, Any], submitted_by: Optional[str]) -> Dict[str, Any]:
        ticket = {
            "id": _random_id("tkt"),
            **payload,
            "status": "OPEN",
            "submittedBy": submitted_by or "",
            "assignedTo": None,
            "createdAt": _now(),
            "updatedAt": _now(),
        }
        self.support_tickets.append(ticket)
        return self._ticket_view(ticket)

    def diagnostics(self, environment: str) -> Dict[str, Any]:
        return {
            "timestamp": _now(),
            "database": {
                "status": "in-memory",
                "userCount": len(self.users),
                "bookingCount": len(self.bookings),
            },
            "system": {"environment": environment},
            "settings": {s["key"]: s["value"] for s in self.settings},
        }


def _booking_search_fields(booking: Dict[str, Any]) -> Tuple[Any, ...]:
    user = booking.get("user") or {}
    service = booking.get("accommodation") or booking.get("transportation") or booking.get("tour") or {}
    return (
        booking["id"],
        user.get("firstName"),
        user.get("lastName"),
        user.get("email"),
        service.get("name"),
    )


def _entity_label(kind: str) -> str:
    return {
        "accommodations": "Accommodation",
        "transportation": "Transportation",
        "tours": "Tour",
    }[kind]
