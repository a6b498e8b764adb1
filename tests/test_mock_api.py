from datetime import date, timedelta

from admin_backend.app.services.reporting import bucket_key


def test_health_endpoint(api):
    response = api.get("/api/system/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["seed_demo_data"] is True


def test_admin_routes_require_bearer_token(api):
    missing = api.get("/api/admin/users")
    assert missing.status_code == 401
    assert missing.json() == {"success": False, "error": "Authentication required"}

    wrong = api.get("/api/admin/users", headers={"Authorization": "Bearer nope"})
    assert wrong.status_code == 401
    assert wrong.json()["error"] == "Invalid token"


def test_users_list_filters_and_pagination(api, auth_headers):
    response = api.get("/api/admin/users", params={"role": "ADMIN"}, headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [u["id"] for u in body["data"]["users"]] == ["usr_admin"]
    assert body["data"]["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "totalItems": 1,
        "itemsPerPage": 20,
    }

    inactive = api.get("/api/admin/users", params={"isActive": "false"}, headers=auth_headers)
    assert [u["id"] for u in inactive.json()["data"]["users"]] == ["usr_gorilla"]

    paged = api.get("/api/admin/users", params={"page": 2, "limit": 3}, headers=auth_headers)
    data = paged.json()["data"]
    assert len(data["users"]) == 1
    assert data["pagination"]["totalPages"] == 2


def test_delete_user_with_active_bookings_is_refused(api, auth_headers):
    response = api.delete("/api/admin/users/usr_jean", headers=auth_headers)
    assert response.status_code == 400
    assert "active bookings" in response.json()["error"]

    gone = api.delete("/api/admin/users/usr_gorilla", headers=auth_headers)
    assert gone.status_code == 200
    assert gone.json()["success"] is True


def test_booking_status_update_records_activity(api, auth_headers):
    response = api.put(
        "/api/admin/bookings/bkg_1002/status",
        json={"status": "CONFIRMED"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "CONFIRMED"

    activity = api.get("/api/admin/activity", params={"limit": 1}, headers=auth_headers).json()["data"]
    latest = activity["activity"][0]
    assert latest["type"] == "BOOKING_STATUS_UPDATED"
    assert latest["metadata"] == {"previousStatus": "PENDING", "newStatus": "CONFIRMED"}
    assert activity["pagination"]["limit"] == 1


def test_bookings_are_joined_and_searchable(api, auth_headers):
    response = api.get("/api/admin/bookings", params={"search": "sarah"}, headers=auth_headers)
    bookings = response.json()["data"]["bookings"]
    assert [b["id"] for b in bookings] == ["bkg_1002"]
    assert bookings[0]["tour"]["name"] == "Gorilla Trekking"
    assert bookings[0]["payment"]["status"] == "FAILED"


def test_listing_create_rejects_non_finite_numbers(api, auth_headers):
    response = api.post(
        "/api/admin/accommodations",
        content='{"name": "Bad", "pricePerNight": NaN, "maxGuests": 2}',
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "pricePerNight" in body["error"]


def test_listing_verify_and_filter(api, auth_headers):
    unverified = api.get(
        "/api/admin/tours", params={"isVerified": "false"}, headers=auth_headers
    ).json()["data"]
    assert [t["id"] for t in unverified["tours"]] == ["tour_city"]
    assert unverified["tours"][0]["location"]["city"] == "Kigali"

    response = api.put(
        "/api/admin/tours/tour_city/verify", json={"isVerified": True}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["isVerified"] is True

    remaining = api.get("/api/admin/tours", params={"isVerified": "false"}, headers=auth_headers)
    assert remaining.json()["data"]["pagination"]["totalItems"] == 0


def test_settings_bulk_upsert(api, auth_headers):
    response = api.put(
        "/api/admin/settings",
        json={
            "settings": [
                {"key": "site_name", "value": "Kigali Trips"},
                {"key": "twilio_from", "value": "+250700000000", "description": "Twilio sender number"},
            ]
        },
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert len(response.json()["data"]["settings"]) == 2

    settings = api.get("/api/admin/settings", headers=auth_headers).json()["data"]["settings"]
    values = {s["key"]: s["value"] for s in settings}
    assert values["site_name"] == "Kigali Trips"
    assert values["twilio_from"] == "+250700000000"
    assert values["timezone"] == "Africa/Kigali"

    missing = api.put("/api/admin/settings/unknown_key", json={"value": "x"}, headers=auth_headers)
    assert missing.status_code == 404


def test_revenue_report_requires_dates(api, auth_headers):
    response = api.get("/api/admin/reports/revenue", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Start date and end date are required"

    inverted = api.get(
        "/api/admin/reports/revenue",
        params={"startDate": "2024-02-01", "endDate": "2024-01-01"},
        headers=auth_headers,
    )
    assert inverted.json()["error"] == "Invalid date range"


def test_revenue_report_buckets_every_day(api, auth_headers):
    end = date.today()
    start = end - timedelta(days=30)
    response = api.get(
        "/api/admin/reports/revenue",
        params={"startDate": start.isoformat(), "endDate": end.isoformat(), "groupBy": "day"},
        headers=auth_headers,
    )
    data = response.json()["data"]
    assert len(data["data"]) == 31
    assert data["summary"]["totalRevenue"] == 570000.0
    assert data["summary"]["totalBookings"] == 2


def test_week_buckets_start_on_sunday():
    assert bucket_key(date(2024, 1, 3), "week") == "2023-12-31"
    assert bucket_key(date(2024, 1, 7), "week") == "2024-01-07"
    assert bucket_key(date(2024, 1, 7), "month") == "2024-01"


def test_help_tickets_pagination_shape(api, auth_headers):
    created = api.post(
        "/api/admin/help/tickets",
        json={"subject": "Cannot export", "description": "CSV is empty"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    ticket = created.json()["data"]
    assert ticket["priority"] == "MEDIUM"
    assert ticket["category"] == "GENERAL"
    assert ticket["status"] == "OPEN"

    listing = api.get(
        "/api/admin/help/tickets", params={"status": "OPEN", "limit": 1}, headers=auth_headers
    ).json()["data"]
    assert listing["pagination"] == {"page": 1, "limit": 1, "total": 2, "pages": 2}


def test_listing_update_leaves_unsent_fields_alone(api, auth_headers):
    created = api.post(
        "/api/admin/accommodations",
        json={"name": "Closed Lodge", "pricePerNight": 50000, "maxGuests": 2, "isAvailable": False},
        headers=auth_headers,
    ).json()["data"]
    assert created["isAvailable"] is False

    response = api.put(
        f"/api/admin/accommodations/{created['id']}",
        json={"name": "Closed Lodge", "description": "Shut for renovation", "pricePerNight": 50000, "maxGuests": 2},
        headers=auth_headers,
    )
    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["description"] == "Shut for renovation"
    assert updated["isAvailable"] is False
