"""Dashboard statistics, activity feed and review queue endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from admin_backend.app.api.deps import envelope, get_store, require_admin
from admin_backend.app.services.mock_store import MockAdminStore

router = APIRouter(prefix="/api/admin", tags=["dashboard"])


@router.get("/dashboard")
async def dashboard(
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    """Headline counters plus the five most recent bookings."""
    return envelope(store.dashboard())


@router.get("/activity")
async def activity(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=25, ge=1),
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    """Newest-first platform activity; page size is capped at 100."""
    return envelope(store.activity_page(page=page, limit=min(limit, 100)))


@router.get("/pending")
async def pending(
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    return envelope(store.pending())


@router.get("/locations")
async def locations(
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    return envelope({"locations": list(store.locations)})
