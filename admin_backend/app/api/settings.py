"""System settings key/value endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Path, status
from loguru import logger

from admin_backend.app.api.activity import record_activity
from admin_backend.app.api.deps import envelope, get_activity_log, get_store, require_admin
from admin_backend.app.models.content import BulkSettingsRequest, SettingEntry, SettingValueRequest
from admin_backend.app.services.mock_store import MockAdminStore, RecordNotFound

router = APIRouter(prefix="/api/admin/settings", tags=["settings"])


@router.get("")
async def list_settings(
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    return envelope({"settings": store.list_settings()})


@router.put("")
async def bulk_update_settings(
    request: BulkSettingsRequest,
    store: MockAdminStore = Depends(get_store),
    activity_log=Depends(get_activity_log),
    admin_id: str = Depends(require_admin),
) -> Dict[str, Any]:
    """Upsert every submitted entry; keys not submitted are left untouched."""
    updated = [
        store.upsert_setting(entry.key, entry.value, entry.description)
        for entry in request.settings
    ]
    record_activity(
        activity_log,
        type="SETTINGS_UPDATED",
        message=f"{len(updated)} settings updated",
        target_type="SETTING",
        actor_user_id=admin_id,
        metadata={"keys": [entry["key"] for entry in updated]},
    )
    logger.info("Bulk settings update ({count} keys)", count=len(updated))
    return envelope({"settings": updated}, message="Settings updated successfully")


@router.put("/{key}")
async def update_setting(
    request: SettingValueRequest,
    key: str = Path(..., min_length=1),
    store: MockAdminStore = Depends(get_store),
    activity_log=Depends(get_activity_log),
    admin_id: str = Depends(require_admin),
) -> Dict[str, Any]:
    """Update the value of an existing setting."""
    try:
        setting = store.update_setting(key, request.value, request.description)
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    record_activity(
        activity_log,
        type="SETTINGS_UPDATED",
        message=f"Setting updated: {key}",
        target_type="SETTING",
        target_id=key,
        actor_user_id=admin_id,
    )
    return envelope(setting, message="Setting updated successfully")


@router.post("")
async def upsert_setting(
    request: SettingEntry,
    store: MockAdminStore = Depends(get_store),
    activity_log=Depends(get_activity_log),
    admin_id: str = Depends(require_admin),
) -> Dict[str, Any]:
    setting = store.upsert_setting(request.key, request.value, request.description)
    record_activity(
        activity_log,
        type="SETTINGS_UPDATED",
        message=f"Setting saved: {request.key}",
        target_type="SETTING",
        target_id=request.key,
        actor_user_id=admin_id,
    )
    return envelope(setting, message="Setting saved successfully")
