"""Catalog endpoints for accommodations, transportation and tours.

The three listing kinds share one set of routes; ``build_router`` binds them
to a collection, a request model and the filters that collection supports.
"""

from typing import Any, Dict, Optional, Tuple, Type

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
from admin_backend.app.models.listings import (
    AccommodationRequest,
    ListingRequest,
    TourRequest,
    TransportationRequest,
    VerifyRequest,
)
from admin_backend.app.services.mock_store import MockAdminStore, RecordNotFound, StoreConflict


def _store_errors(exc: Exception) -> HTTPException:
    if isinstance(exc, RecordNotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def build_router(
    kind: str,
    label: str,
    model: Type[ListingRequest],
    filter_fields: Tuple[str, ...],
) -> APIRouter:
    """Create the CRUD + verify router for one listing collection."""
    router = APIRouter(prefix=f"/api/admin/{kind}", tags=[kind])
    target_type = label.upper()

    @router.get("")
    async def list_items(
        page: int = Query(default=1, ge=1),
        limit: int = Query(default=12, ge=1),
        search: Optional[str] = None,
        type: Optional[str] = None,
        category: Optional[str] = None,
        vehicle_type: Optional[str] = Query(default=None, alias="vehicleType"),
        location_id: Optional[str] = Query(default=None, alias="locationId"),
        is_verified: Optional[bool] = Query(default=None, alias="isVerified"),
        is_available: Optional[bool] = Query(default=None, alias="isAvailable"),
        store: MockAdminStore = Depends(get_store),
        settings: Settings = Depends(get_app_settings),
        _admin: str = Depends(require_admin),
    ) -> Dict[str, Any]:
        requested = {
            "type": type,
            "category": category,
            "vehicleType": vehicle_type,
            "locationId": location_id,
            "isVerified": is_verified,
            "isAvailable": is_available,
        }
        filters = {field: requested[field] for field in filter_fields}
        items, pagination = store.list_listings(
            kind,
            page=page,
            limit=page_limit(limit, settings),
            search=search,
            filters=filters,
        )
        return envelope({kind: items, "pagination": pagination})

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_item(
        request: model,  # type: ignore[valid-type]
        store: MockAdminStore = Depends(get_store),
        activity_log=Depends(get_activity_log),
        admin_id: str = Depends(require_admin),
    ) -> Dict[str, Any]:
        try:
            item = store.create_listing(kind, request.to_payload())
        except StoreConflict as exc:
            raise _store_errors(exc) from exc

        record_activity(
            activity_log,
            type=f"{target_type}_CREATED",
            message=f"{label} added: {item['name']}",
            target_type=target_type,
            target_id=item["id"],
            actor_user_id=admin_id,
        )
        return envelope(item, message=f"{label} created successfully")

    @router.put("/{item_id}")
    async def update_item(
        request: model,  # type: ignore[valid-type]
        item_id: str = Path(..., min_length=1),
        store: MockAdminStore = Depends(get_store),
        activity_log=Depends(get_activity_log),
        admin_id: str = Depends(require_admin),
    ) -> Dict[str, Any]:
        try:
            item = store.update_listing(kind, item_id, request.to_payload(partial=True))
        except (RecordNotFound, StoreConflict) as exc:
            raise _store_errors(exc) from exc

        record_activity(
            activity_log,
            type=f"{target_type}_UPDATED",
            message=f"{label} updated: {item['name']}",
            target_type=target_type,
            target_id=item_id,
            actor_user_id=admin_id,
        )
        return envelope(item, message=f"{label} updated successfully")

    @router.delete("/{item_id}")
    async def delete_item(
        item_id: str = Path(..., min_length=1),
        store: MockAdminStore = Depends(get_store),
        activity_log=Depends(get_activity_log),
        admin_id: str = Depends(require_admin),
    ) -> Dict[str, Any]:
        try:
            item = store.delete_listing(kind, item_id)
        except (RecordNotFound, StoreConflict) as exc:
            raise _store_errors(exc) from exc

        record_activity(
            activity_log,
            type=f"{target_type}_DELETED",
            message=f"{label} deleted: {item['name']}",
            target_type=target_type,
            target_id=item_id,
            actor_user_id=admin_id,
        )
        return envelope(None, message=f"{label} deleted successfully")

    @router.put("/{item_id}/verify")
    async def verify_item(
        request: VerifyRequest,
        item_id: str = Path(..., min_length=1),
        store: MockAdminStore = Depends(get_store),
        activity_log=Depends(get_activity_log),
        admin_id: str = Depends(require_admin),
    ) -> Dict[str, Any]:
        try:
            previous, item = store.verify_listing(kind, item_id, request.is_verified)
        except RecordNotFound as exc:
            raise _store_errors(exc) from exc

        state = "verified" if request.is_verified else "unverified"
        record_activity(
            activity_log,
            type=f"{target_type}_VERIFIED" if request.is_verified else f"{target_type}_UNVERIFIED",
            message=f"{label} {state}: {item['name']}",
            target_type=target_type,
            target_id=item_id,
            actor_user_id=admin_id,
            metadata={"previous": previous, "isVerified": request.is_verified},
        )
        return envelope(item, message=f"{label} {state} successfully")

    return router


accommodations_router = build_router(
    "accommodations",
    "Accommodation",
    AccommodationRequest,
    ("type", "category", "locationId", "isVerified", "isAvailable"),
)
transportation_router = build_router(
    "transportation",
    "Transportation",
    TransportationRequest,
    ("type", "vehicleType", "locationId", "isVerified", "isAvailable"),
)
tours_router = build_router(
    "tours",
    "Tour",
    TourRequest,
    ("type", "category", "locationId", "isVerified", "isAvailable"),
)
