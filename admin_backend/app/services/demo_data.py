"""Seed records for the mock admin API."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

LOCATIONS: List[Dict[str, Any]] = [
    {"id": "loc_kgl", "name": "Kigali City", "city": "Kigali", "district": "Nyarugenge", "province": "Kigali"},
    {"id": "loc_mus", "name": "Musanze", "city": "Musanze", "district": "Musanze", "province": "Northern"},
    {"id": "loc_rub", "name": "Rubavu Lakeside", "city": "Gisenyi", "district": "Rubavu", "province": "Western"},
    {"id": "loc_nyu", "name": "Nyungwe Forest", "city": "Nyamasheke", "district": "Nyamasheke", "province": "Western"},
]

DEFAULT_SETTINGS: List[Dict[str, str]] = [
    {"key": "site_name", "value": "Visit Rwanda Travel", "description": "Website name"},
    {"key": "contact_email", "value": "support@example.com", "description": "Contact email"},
    {"key": "language", "value": "en", "description": "Default language"},
    {"key": "timezone", "value": "Africa/Kigali", "description": "Default timezone"},
    {"key": "maintenance_mode", "value": "false", "description": "Maintenance mode status"},
    {"key": "email_provider_enabled", "value": "true", "description": "Email provider status"},
]


def _ago(now: datetime, days: int, hours: int = 0) -> str:
    return (now - timedelta(days=days, hours=hours)).isoformat()


def build_demo_data(now: datetime | None = None, currency: str = "RWF") -> Dict[str, List[Dict[str, Any]]]:
    """Return a fresh, mutable set of demo collections keyed by collection name."""
    now = now or datetime.now(timezone.utc)

    users = [
        {
            "id": "usr_admin",
            "firstName": "Aline",
            "lastName": "Uwase",
            "email": "admin@example.com",
            "phone": "+250788000001",
            "role": "ADMIN",
            "isVerified": True,
            "isActive": True,
            "nationality": "RW",
            "language": "en",
            "createdAt": _ago(now, 90),
            "lastLogin": _ago(now, 0, 2),
        },
        {
            "id": "usr_jean",
            "firstName": "Jean",
            "lastName": "Mugisha",
            "email": "jean@example.com",
            "phone": "+250788000002",
            "role": "USER",
            "isVerified": True,
            "isActive": True,
            "nationality": "RW",
            "language": "fr",
            "createdAt": _ago(now, 40),
            "lastLogin": _ago(now, 1),
        },
        {
            "id": "usr_sarah",
            "firstName": "Sarah",
            "lastName": "O'Neil, Jr.",
            "email": "sarah@example.com",
            "phone": None,
            "role": "USER",
            "isVerified": False,
            "isActive": True,
            "nationality": "IE",
            "language": "en",
            "createdAt": _ago(now, 12),
            "lastLogin": None,
        },
        {
            "id": "usr_gorilla",
            "firstName": "Eric",
            "lastName": "Habimana",
            "email": "tours@example.com",
            "phone": "+250788000004",
            "role": "PROVIDER",
            "isVerified": True,
            "isActive": False,
            "nationality": "RW",
            "language": "en",
            "createdAt": _ago(now, 30),
            "lastLogin": _ago(now, 20),
        },
    ]

    accommodations = [
        {
            "id": "acc_mille",
            "name": "Hotel des Mille Collines",
            "description": "Historic hotel in central Kigali",
            "type": "HOTEL",
            "category": "LUXURY",
            "locationId": "loc_kgl",
            "address": "KN 6 Ave",
            "pricePerNight": 180000.0,
            "currency": currency,
            "maxGuests": 3,
            "bedrooms": 1,
            "bathrooms": 1,
            "amenities": ["wifi", "pool"],
            "images": [],
            "isAvailable": True,
            "isVerified": True,
            "createdAt": _ago(now, 60),
        },
        {
            "id": "acc_lake",
            "name": "Lake Kivu Lodge",
            "description": "Lakeside cottages, breakfast included",
            "type": "GUESTHOUSE",
            "category": "STANDARD",
            "locationId": "loc_rub",
            "address": "Avenue de la Production",
            "pricePerNight": 95000.0,
            "currency": currency,
            "maxGuests": 4,
            "bedrooms": 2,
            "bathrooms": 1,
            "amenities": ["breakfast"],
            "images": [],
            "isAvailable": True,
            "isVerified": False,
            "createdAt": _ago(now, 8),
        },
    ]

    transportation = [
        {
            "id": "trn_airport",
            "name": "Kigali Airport Pickup",
            "description": "Meet and greet at KGL arrivals",
            "type": "AIRPORT_PICKUP",
            "vehicleType": "STANDARD",
            "locationId": "loc_kgl",
            "capacity": 3,
            "pricePerTrip": 30000.0,
            "pricePerHour": None,
            "currency": currency,
            "amenities": ["water"],
            "images": [],
            "isAvailable": True,
            "isVerified": True,
            "createdAt": _ago(now, 50),
        },
        {
            "id": "trn_safari",
            "name": "4x4 Safari Land Cruiser",
            "description": "Self-drive or chauffeured",
            "type": "PRIVATE_TRANSPORT",
            "vehicleType": "VAN",
            "locationId": "loc_mus",
            "capacity": 6,
            "pricePerTrip": 150000.0,
            "pricePerHour": 20000.0,
            "currency": currency,
            "amenities": [],
            "images": [],
            "isAvailable": True,
            "isVerified": False,
            "createdAt": _ago(now, 5),
        },
    ]

    tours = [
        {
            "id": "tour_gorilla",
            "name": "Gorilla Trekking",
            "description": "Volcanoes National Park permit and guide",
            "type": "NATURE_TOUR",
            "category": "PREMIUM",
            "locationId": "loc_mus",
            "duration": 8,
            "maxParticipants": 8,
            "minParticipants": 1,
            "pricePerPerson": 1500000.0,
            "currency": currency,
            "itinerary": ["Briefing", "Trek", "Hour with the gorillas"],
            "includes": ["Permit", "Guide"],
            "excludes": ["Tips"],
            "meetingPoint": "Kinigi HQ",
            "startTime": "07:00",
            "endTime": "15:00",
            "images": [],
            "isAvailable": True,
            "isVerified": True,
            "createdAt": _ago(now, 45),
        },
        {
            "id": "tour_city",
            "name": "Kigali City Walk",
            "description": "Markets, memorial and coffee",
            "type": "CITY_TOUR",
            "category": "STANDARD",
            "locationId": "loc_kgl",
            "duration": 4,
            "maxParticipants": 12,
            "minParticipants": 2,
            "pricePerPerson": 25000.0,
            "currency": currency,
            "itinerary": ["Kimironko market", "Memorial", "Coffee tasting"],
            "includes": ["Guide"],
            "excludes": [],
            "meetingPoint": "Convention Centre",
            "startTime": "09:00",
            "endTime": "13:00",
            "images": [],
            "isAvailable": True,
            "isVerified": False,
            "createdAt": _ago(now, 3),
        },
    ]

    bookings = [
        {
            "id": "bkg_1001",
            "userId": "usr_jean",
            "serviceType": "ACCOMMODATION",
            "serviceId": "acc_mille",
            "startDate": _ago(now, -10),
            "endDate": _ago(now, -13),
            "numberOfPeople": 2,
            "totalAmount": 540000.0,
            "currency": currency,
            "status": "CONFIRMED",
            "specialRequests": "Late check-in, after 22:00",
            "createdAt": _ago(now, 9),
        },
        {
            "id": "bkg_1002",
            "userId": "usr_sarah",
            "serviceType": "TOUR",
            "serviceId": "tour_gorilla",
            "startDate": _ago(now, -20),
            "endDate": None,
            "numberOfPeople": 1,
            "totalAmount": 1500000.0,
            "currency": currency,
            "status": "PENDING",
            "specialRequests": "",
            "createdAt": _ago(now, 4),
        },
        {
            "id": "bkg_1003",
            "userId": "usr_jean",
            "serviceType": "TRANSPORTATION",
            "serviceId": "trn_airport",
            "startDate": _ago(now, 15),
            "endDate": None,
            "numberOfPeople": 2,
            "totalAmount": 30000.0,
            "currency": currency,
            "status": "COMPLETED",
            "specialRequests": "",
            "createdAt": _ago(now, 20),
        },
        {
            "id": "bkg_1004",
            "userId": "usr_admin",
            "serviceType": "TOUR",
            "serviceId": "tour_city",
            "startDate": _ago(now, 1),
            "endDate": None,
            "numberOfPeople": 3,
            "totalAmount": 75000.0,
            "currency": currency,
            "status": "CANCELLED",
            "specialRequests": "",
            "createdAt": _ago(now, 2),
        },
    ]

    payments = [
        {"id": "pay_1", "bookingId": "bkg_1001", "amount": 540000.0, "status": "COMPLETED", "createdAt": _ago(now, 9)},
        {"id": "pay_2", "bookingId": "bkg_1003", "amount": 30000.0, "status": "COMPLETED", "createdAt": _ago(now, 20)},
        {"id": "pay_3", "bookingId": "bkg_1002", "amount": 1500000.0, "status": "FAILED", "createdAt": _ago(now, 4)},
    ]

    help_categories = [
        {"id": "hcat_start", "name": "Getting started", "description": "Dashboard basics", "order": 0, "icon": "book"},
        {"id": "hcat_book", "name": "Bookings", "description": "Managing reservations", "order": 1, "icon": "calendar"},
    ]

    help_articles = [
        {
            "id": "hart_1",
            "title": "Verifying a new listing",
            "content": "Open the listing screen and use the verify toggle.",
            "categoryId": "hcat_start",
            "tags": ["verification", "listings"],
            "order": 0,
            "isPublished": True,
            "viewCount": 12,
            "createdAt": _ago(now, 30),
            "updatedAt": _ago(now, 30),
        },
        {
            "id": "hart_2",
            "title": "Refunding a booking",
            "content": "Set the booking status to REFUNDED once the payment is reversed.",
            "categoryId": "hcat_book",
            "tags": ["refund"],
            "order": 1,
            "isPublished": True,
            "viewCount": 4,
            "createdAt": _ago(now, 14),
            "updatedAt": _ago(now, 14),
        },
    ]

    support_tickets = [
        {
            "id": "tkt_1",
            "subject": "Payment webhook delays",
            "description": "Payments show as pending for several minutes.",
            "priority": "HIGH",
            "category": "TECHNICAL",
            "status": "OPEN",
            "submittedBy": "usr_admin",
            "assignedTo": None,
            "createdAt": _ago(now, 2),
            "updatedAt": _ago(now, 2),
        }
    ]

    activity: List[Dict[str, Any]] = []
    for user in users:
        activity.append(
            _activity("USER_REGISTERED", f"User registered: {user['email']}", "USER", user["id"], user["createdAt"])
        )
    for booking in bookings:
        activity.append(
            _activity("BOOKING_CREATED", f"Booking created • {booking['id']}", "BOOKING", booking["id"], booking["createdAt"])
        )
    for payment in payments:
        kind = "PAYMENT_COMPLETED" if payment["status"] == "COMPLETED" else "PAYMENT_FAILED"
        activity.append(
            _activity(kind, f"Payment {payment['status'].lower()} • {payment['bookingId']}", "PAYMENT", payment["id"], payment["createdAt"])
        )
    for collection, kind, label in (
        (accommodations, "ACCOMMODATION_CREATED", "Accommodation"),
        (transportation, "TRANSPORTATION_CREATED", "Transportation"),
        (tours, "TOUR_CREATED", "Tour"),
    ):
        for item in collection:
            activity.append(
                _activity(kind, f"{label} added: {item['name']}", label.upper(), item["id"], item["createdAt"])
            )

    return {
        "locations": [dict(location) for location in LOCATIONS],
        "users": users,
        "accommodations": accommodations,
        "transportation": transportation,
        "tours": tours,
        "bookings": bookings,
        "payments": payments,
        "settings": [dict(setting) for setting in DEFAULT_SETTINGS],
        "help_categories": help_categories,
        "help_articles": help_articles,
        "support_tickets": support_tickets,
        "activity": activity,
    }


def _activity(kind: str, message: str, target_type: str, target_id: str, timestamp: str) -> Dict[str, Any]:
    return {
        "id": f"act_{target_id}_{kind.lower()}",
        "type": kind,
        "timestamp": timestamp,
        "message": message,
        "targetType": target_type,
        "targetId": target_id,
        "actorUserId": None,
        "metadata": None,
    }
