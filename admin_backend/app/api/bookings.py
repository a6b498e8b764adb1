"""Booking administration endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from admin_backend.app.api.activity import record_activity
from admin_backend.app.api.deps import (
    envelope,
    get_activity_log,
    get_app_settings,
    get_store,
    page_limit,
    require_admin,
)
from admin_backend.app.config import Settings
from admin_backend.app.models.bookings import BookingStatus, BookingStatusRequest, ServiceType
from admin_backend.app.services.mock_store import MockAdminStore, RecordNotFound

router = APIRouter(prefix="/api/admin/bookings", tags=["bookings"])


@router.get("")
async def list_bookings(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1),
    status_filter: Optional[BookingStatus] = Query(default=None, alias="status"),
    service_type: Optional[ServiceType] = Query(default=None, alias="serviceType"),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    search: Optional[str] = None,
    store: MockAdminStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    """Paginated bookings joined with guest, service and payment details."""
    bookings, pagination = store.list_bookings(
        page=page,
        limit=page_limit(limit, settings),
        status=status_filter.value if status_filter else None,
        service_type=service_type.value if service_type else None,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )
    return envelope({"bookings": bookings, "pagination": pagination})


@router.put("/{booking_id}/status")
async def update_booking_status(
    request: BookingStatusRequest,
    booking_id: str = Path(..., min_length=1),
    store: MockAdminStore = Depends(get_store),
    activity_log=Depends(get_activity_log),
    admin_id: str = Depends(require_admin),
) -> Dict[str, Any]:
    """Move a booking to a new status."""
    try:
        previous, booking = store.update_booking_status(booking_id, request.status.value)
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    record_activity(
        activity_log,
        type="BOOKING_STATUS_UPDATED",
        message=f"Booking {booking_id} status changed to {request.status.value}",
        target_type="BOOKING",
        target_id=booking_id,
        actor_user_id=admin_id,
        metadata={"previousStatus": previous, "newStatus": request.status.value},
    )
    return envelope(booking, message="Booking status updated successfully")
