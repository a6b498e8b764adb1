"""System utilities endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from admin_backend.app.api.deps import get_activity_log, get_app_settings
from admin_backend.app.config import Settings

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/health")
async def health(
    settings: Settings = Depends(get_app_settings),
    activity_log=Depends(get_activity_log),
) -> Dict[str, Any]:
    """Basic health probe for the admin console."""
    return {
        "status": "ok",
        "app_name": settings.app_name,
        "seed_demo_data": settings.seed_demo_data,
        "environment": settings.environment,
        "activity_entries": len(activity_log),
    }
