"""Per-screen configuration for the resource management screens.

Each :class:`ResourceSpec` tells a list controller where to fetch, how to turn
UI filters into query parameters, how to map server records to their display
shape, which endpoint flips each flag, and which columns go into a CSV export.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

ALL = "all"

ROLES = ("USER", "PROVIDER", "ADMIN")
BOOKING_STATUSES = ("PENDING", "CONFIRMED", "CANCELLED", "COMPLETED", "REFUNDED")
SERVICE_TYPES = ("ACCOMMODATION", "TRANSPORTATION", "TOUR")
ACCOMMODATION_TYPES = ("HOTEL", "GUESTHOUSE", "APARTMENT", "VILLA", "HOSTEL", "CAMPING", "HOMESTAY")
TRANSPORTATION_TYPES = ("AIRPORT_PICKUP", "CITY_TRANSPORT", "TOUR_TRANSPORT", "PRIVATE_TRANSPORT")
VEHICLE_TYPES = ("STANDARD", "PREMIUM", "VAN", "BUS", "MOTORCYCLE")
TOUR_TYPES = (
    "CITY_TOUR",
    "CULTURAL_TOUR",
    "ADVENTURE_TOUR",
    "FOOD_TOUR",
    "NIGHTLIFE_TOUR",
    "EDUCATIONAL_TOUR",
    "NATURE_TOUR",
)
CATEGORIES = ("BUDGET", "STANDARD", "PREMIUM", "LUXURY", "VIP")


def _passthrough(param: str) -> Callable[[Any], Dict[str, Any]]:
    return lambda value: {param: value}


@dataclass(frozen=True)
class FilterSpec:
    """A UI filter and the query parameters it expands into."""

    name: str
    label: str
    options: Tuple[str, ...] = ()
    expand: Optional[Callable[[Any], Dict[str, Any]]] = None

    def to_params(self, value: Any) -> Dict[str, Any]:
        if value is None or value == "" or value == ALL:
            return {}
        expand = self.expand or _passthrough(self.name)
        return expand(value)


@dataclass(frozen=True)
class FieldSpec:
    """A create/update form field.

    ``kind`` is one of ``text``, ``int``, ``float``, ``optional_float``,
    ``list`` or ``select``.
    """

    name: str
    label: str
    kind: str = "text"
    default: str = ""
    options: Tuple[str, ...] = ()
    required: bool = False


ExportColumn = Tuple[str, Callable[[Dict[str, Any]], Any]]


@dataclass(frozen=True)
class ResourceSpec:
    key: str
    label: str
    endpoint: str
    collection: str
    page_size: int
    empty_message: str
    mapper: Callable[[Dict[str, Any]], Dict[str, Any]]
    filters: Tuple[FilterSpec, ...] = ()
    flag_paths: Mapping[str, str] = field(default_factory=dict)
    export_columns: Tuple[ExportColumn, ...] = ()
    form_fields: Tuple[FieldSpec, ...] = ()
    supports_update: bool = False
    supports_delete: bool = False

    def filter_params(self, filters: Mapping[str, Any]) -> Dict[str, Any]:
        """Expand UI filter values into request parameters, dropping ``all``/empty."""
        params: Dict[str, Any] = {}
        known = {spec.name: spec for spec in self.filters}
        for name, value in filters.items():
            spec = known.get(name) or FilterSpec(name, name)
            params.update(spec.to_params(value))
        return params

    def flag_path(self, record_id: str, flag: str) -> str:
        try:
            suffix = self.flag_paths[flag]
        except KeyError as exc:
            raise ValueError(f"{self.label} has no toggle for {flag!r}") from exc
        return f"{self.endpoint}/{record_id}/{suffix}"

    def search_widget_key(self) -> str:
        return f"{self.key}_search"

    def filter_widget_key(self, name: str) -> str:
        return f"{self.key}_{name}"

    def filter_widget_keys(self) -> Tuple[str, ...]:
        """Session-state keys of the search box and every filter input."""
        return (self.search_widget_key(),) + tuple(self.filter_widget_key(spec.name) for spec in self.filters)


# --- Display mappers ---


def _date(value: Optional[str]) -> str:
    return (value or "")[:10]


def _yes_no(value: Any) -> str:
    return "Yes" if value else "No"


def map_user(record: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": record["id"],
        "name": f"{record.get('firstName', '')} {record.get('lastName', '')}".strip(),
        "email": record.get("email"),
        "phone": record.get("phone"),
        "role": record.get("role"),
        "isActive": bool(record.get("isActive")),
        "isVerified": bool(record.get("isVerified")),
        "nationality": record.get("nationality"),
        "language": record.get("language"),
        "createdAt": record.get("createdAt"),
        "lastLogin": record.get("lastLogin"),
    }


def map_booking(record: Dict[str, Any]) -> Dict[str, Any]:
    user = record.get("user") or {}
    service = record.get("accommodation") or record.get("transportation") or record.get("tour") or {}
    payment = record.get("payment") or {}
    return {
        "id": record["id"],
        "guestName": f"{user.get('firstName', '')} {user.get('lastName', '')}".strip() or "Unknown",
        "guestEmail": user.get("email"),
        "serviceType": record.get("serviceType"),
        "serviceName": service.get("name") or "N/A",
        "startDate": record.get("startDate"),
        "endDate": record.get("endDate"),
        "numberOfPeople": record.get("numberOfPeople"),
        "totalAmount": record.get("totalAmount"),
        "currency": record.get("currency"),
        "status": record.get("status"),
        "paymentStatus": payment.get("status"),
        "specialRequests": record.get("specialRequests") or "",
        "createdAt": record.get("createdAt"),
    }


def map_listing(record: Dict[str, Any]) -> Dict[str, Any]:
    location = record.get("location") or {}
    view = {key: value for key, value in record.items() if key != "location"}
    view["locationName"] = location.get("name")
    view["city"] = location.get("city")
    view["isVerified"] = bool(record.get("isVerified"))
    view["isAvailable"] = bool(record.get("isAvailable"))
    return view


# --- Filters ---

USER_STATUS_FILTER = FilterSpec(
    "status",
    "Status",
    ("active", "inactive", "unverified"),
    expand=lambda value: {
        "active": {"isActive": True, "isVerified": True},
        "inactive": {"isActive": False},
        "unverified": {"isVerified": False},
    }.get(value, {}),
)

VERIFIED_FILTER = FilterSpec(
    "verified",
    "Verification",
    ("verified", "unverified"),
    expand=lambda value: {"isVerified": value == "verified"},
)

AVAILABILITY_FILTER = FilterSpec(
    "availability",
    "Availability",
    ("available", "unavailable"),
    expand=lambda value: {"isAvailable": value == "available"},
)


# --- Forms ---

_LISTING_COMMON = (
    FieldSpec("name", "Name", required=True),
    FieldSpec("description", "Description"),
    FieldSpec("locationId", "Location", kind="select"),
)

ACCOMMODATION_FIELDS = _LISTING_COMMON + (
    FieldSpec("type", "Type", kind="select", default="HOTEL", options=ACCOMMODATION_TYPES),
    FieldSpec("category", "Category", kind="select", default="STANDARD", options=CATEGORIES),
    FieldSpec("address", "Address"),
    FieldSpec("pricePerNight", "Price per night", kind="float", required=True),
    FieldSpec("currency", "Currency", default="RWF"),
    FieldSpec("maxGuests", "Max guests", kind="int", required=True),
    FieldSpec("bedrooms", "Bedrooms", kind="int", default="1"),
    FieldSpec("bathrooms", "Bathrooms", kind="int", default="1"),
    FieldSpec("amenities", "Amenities (comma separated)", kind="list"),
    FieldSpec("images", "Image URLs (comma separated)", kind="list"),
)

TRANSPORTATION_FIELDS = _LISTING_COMMON + (
    FieldSpec("type", "Type", kind="select", default="AIRPORT_PICKUP", options=TRANSPORTATION_TYPES),
    FieldSpec("vehicleType", "Vehicle type", kind="select", default="STANDARD", options=VEHICLE_TYPES),
    FieldSpec("capacity", "Capacity", kind="int", required=True),
    FieldSpec("pricePerTrip", "Price per trip", kind="float", required=True),
    FieldSpec("pricePerHour", "Price per hour", kind="optional_float"),
    FieldSpec("currency", "Currency", default="RWF"),
    FieldSpec("amenities", "Amenities (comma separated)", kind="list"),
    FieldSpec("images", "Image URLs (comma separated)", kind="list"),
)

TOUR_FIELDS = _LISTING_COMMON + (
    FieldSpec("type", "Type", kind="select", default="CITY_TOUR", options=TOUR_TYPES),
    FieldSpec("category", "Category", kind="select", default="STANDARD", options=CATEGORIES),
    FieldSpec("duration", "Duration (hours)", kind="int", required=True),
    FieldSpec("maxParticipants", "Max participants", kind="int", required=True),
    FieldSpec("minParticipants", "Min participants", kind="int", default="1"),
    FieldSpec("pricePerPerson", "Price per person", kind="float", required=True),
    FieldSpec("currency", "Currency", default="RWF"),
    FieldSpec("itinerary", "Itinerary (comma separated)", kind="list"),
    FieldSpec("includes", "Includes (comma separated)", kind="list"),
    FieldSpec("excludes", "Excludes (comma separated)", kind="list"),
    FieldSpec("meetingPoint", "Meeting point"),
    FieldSpec("startTime", "Start time"),
    FieldSpec("endTime", "End time"),
    FieldSpec("images", "Image URLs (comma separated)", kind="list"),
)

USER_FIELDS = (
    FieldSpec("firstName", "First name", required=True),
    FieldSpec("lastName", "Last name", required=True),
    FieldSpec("email", "Email", required=True),
    FieldSpec("role", "Role", kind="select", default="USER", options=ROLES),
)


# --- Resource specs ---

USERS = ResourceSpec(
    key="users",
    label="Users",
    endpoint="/admin/users",
    collection="users",
    page_size=20,
    empty_message="No users found",
    mapper=map_user,
    filters=(FilterSpec("role", "Role", ROLES), USER_STATUS_FILTER),
    flag_paths={"isActive": "status", "isVerified": "status", "role": "status"},
    export_columns=(
        ("ID", lambda r: r["id"]),
        ("Name", lambda r: r["name"]),
        ("Email", lambda r: r["email"]),
        ("Phone", lambda r: r["phone"] or "N/A"),
        ("Role", lambda r: r["role"]),
        ("Status", lambda r: "Active" if r["isActive"] else "Suspended"),
        ("Verified", lambda r: _yes_no(r["isVerified"])),
        ("Nationality", lambda r: r["nationality"] or "N/A"),
        ("Language", lambda r: r["language"] or "N/A"),
        ("Created Date", lambda r: _date(r["createdAt"])),
    ),
    form_fields=USER_FIELDS,
)

BOOKINGS = ResourceSpec(
    key="bookings",
    label="Bookings",
    endpoint="/admin/bookings",
    collection="bookings",
    page_size=20,
    empty_message="No bookings found",
    mapper=map_booking,
    filters=(
        FilterSpec("status", "Status", BOOKING_STATUSES),
        FilterSpec("serviceType", "Service type", SERVICE_TYPES),
        FilterSpec("startDate", "From"),
        FilterSpec("endDate", "To"),
    ),
    flag_paths={"status": "status"},
    export_columns=(
        ("ID", lambda r: r["id"]),
        ("Guest Name", lambda r: r["guestName"]),
        ("Service Type", lambda r: r["serviceType"]),
        ("Service Name", lambda r: r["serviceName"]),
        ("Start Date", lambda r: _date(r["startDate"])),
        ("End Date", lambda r: _date(r["endDate"]) or "N/A"),
        ("People", lambda r: r["numberOfPeople"]),
        ("Amount", lambda r: f"{r['totalAmount']} {r['currency']}"),
        ("Status", lambda r: r["status"]),
        ("Created Date", lambda r: _date(r["createdAt"])),
        ("Special Requests", lambda r: r["specialRequests"]),
    ),
)

ACCOMMODATIONS = ResourceSpec(
    key="accommodations",
    label="Accommodations",
    endpoint="/admin/accommodations",
    collection="accommodations",
    page_size=12,
    empty_message="No accommodations found",
    mapper=map_listing,
    filters=(
        FilterSpec("type", "Type", ACCOMMODATION_TYPES),
        FilterSpec("category", "Category", CATEGORIES),
        VERIFIED_FILTER,
        AVAILABILITY_FILTER,
    ),
    flag_paths={"isVerified": "verify"},
    export_columns=(
        ("ID", lambda r: r["id"]),
        ("Name", lambda r: r["name"]),
        ("Type", lambda r: r.get("type")),
        ("Category", lambda r: r.get("category")),
        ("Location", lambda r: r.get("city") or "N/A"),
        ("Price/Night", lambda r: r.get("pricePerNight")),
        ("Max Guests", lambda r: r.get("maxGuests")),
        ("Currency", lambda r: r.get("currency")),
        ("Verified", lambda r: _yes_no(r["isVerified"])),
        ("Available", lambda r: _yes_no(r["isAvailable"])),
    ),
    form_fields=ACCOMMODATION_FIELDS,
    supports_update=True,
    supports_delete=True,
)

TRANSPORTATION = ResourceSpec(
    key="transportation",
    label="Transportation",
    endpoint="/admin/transportation",
    collection="transportation",
    page_size=12,
    empty_message="No transportation services found",
    mapper=map_listing,
    filters=(
        FilterSpec("type", "Type", TRANSPORTATION_TYPES),
        FilterSpec("vehicleType", "Vehicle type", VEHICLE_TYPES),
        VERIFIED_FILTER,
        AVAILABILITY_FILTER,
    ),
    flag_paths={"isVerified": "verify"},
    export_columns=(
        ("ID", lambda r: r["id"]),
        ("Name", lambda r: r["name"]),
        ("Type", lambda r: r.get("type")),
        ("Vehicle Type", lambda r: r.get("vehicleType")),
        ("Location", lambda r: r.get("city") or "N/A"),
        ("Capacity", lambda r: r.get("capacity")),
        ("Price/Trip", lambda r: r.get("pricePerTrip")),
        ("Price/Hour", lambda r: r.get("pricePerHour") if r.get("pricePerHour") is not None else "N/A"),
        ("Currency", lambda r: r.get("currency")),
        ("Verified", lambda r: _yes_no(r["isVerified"])),
        ("Available", lambda r: _yes_no(r["isAvailable"])),
    ),
    form_fields=TRANSPORTATION_FIELDS,
    supports_update=True,
    supports_delete=True,
)

TOURS = ResourceSpec(
    key="tours",
    label="Tours",
    endpoint="/admin/tours",
    collection="tours",
    page_size=12,
    empty_message="No tours found",
    mapper=map_listing,
    filters=(
        FilterSpec("type", "Type", TOUR_TYPES),
        FilterSpec("category", "Category", CATEGORIES),
        VERIFIED_FILTER,
        AVAILABILITY_FILTER,
    ),
    flag_paths={"isVerified": "verify"},
    export_columns=(
        ("ID", lambda r: r["id"]),
        ("Name", lambda r: r["name"]),
        ("Type", lambda r: r.get("type")),
        ("Category", lambda r: r.get("category")),
        ("Location", lambda r: r.get("city") or "N/A"),
        ("Duration (hours)", lambda r: r.get("duration")),
        ("Max Participants", lambda r: r.get("maxParticipants")),
        ("Min Participants", lambda r: r.get("minParticipants")),
        ("Price/Person", lambda r: r.get("pricePerPerson")),
        ("Currency", lambda r: r.get("currency")),
        ("Verified", lambda r: _yes_no(r["isVerified"])),
        ("Available", lambda r: _yes_no(r["isAvailable"])),
    ),
    form_fields=TOUR_FIELDS,
    supports_update=True,
    supports_delete=True,
)

RESOURCES: Dict[str, ResourceSpec] = {
    spec.key: spec for spec in (USERS, BOOKINGS, ACCOMMODATIONS, TRANSPORTATION, TOURS)
}


def get_resource(key: str) -> ResourceSpec:
    try:
        return RESOURCES[key]
    except KeyError as exc:
        raise ValueError(f"Unknown resource {key!r}; choose from {', '.join(RESOURCES)}") from exc
