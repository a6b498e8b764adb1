"""User administration endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from loguru import logger

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
from admin_backend.app.models.users import Role, UserCreateRequest, UserStatusRequest
from admin_backend.app.services.mock_store import MockAdminStore, RecordNotFound, StoreConflict

router = APIRouter(prefix="/api/admin/users", tags=["users"])


@router.get("")
async def list_users(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1),
    search: Optional[str] = None,
    role: Optional[Role] = None,
    is_verified: Optional[bool] = Query(default=None, alias="isVerified"),
    is_active: Optional[bool] = Query(default=None, alias="isActive"),
    store: MockAdminStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    """Paginated user list with search, role and flag filters."""
    users, pagination = store.list_users(
        page=page,
        limit=page_limit(limit, settings),
        search=search,
        role=role.value if role else None,
        is_verified=is_verified,
        is_active=is_active,
    )
    return envelope({"users": users, "pagination": pagination})


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: UserCreateRequest,
    store: MockAdminStore = Depends(get_store),
    activity_log=Depends(get_activity_log),
    admin_id: str = Depends(require_admin),
) -> Dict[str, Any]:
    """Create a user account on behalf of an administrator."""
    try:
        user = store.create_user(request.to_payload())
    except StoreConflict as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    record_activity(
        activity_log,
        type="USER_REGISTERED",
        message=f"User created by admin: {user['email']}",
        target_type="USER",
        target_id=user["id"],
        actor_user_id=admin_id,
    )
    return envelope(user, message="User created successfully")


@router.put("/{user_id}/status")
async def update_user_status(
    request: UserStatusRequest,
    user_id: str = Path(..., min_length=1),
    store: MockAdminStore = Depends(get_store),
    activity_log=Depends(get_activity_log),
    admin_id: str = Depends(require_admin),
) -> Dict[str, Any]:
    """Flip a user's active/verified flags or change their role."""
    changes = request.to_payload()
    try:
        previous, user = store.update_user_status(user_id, changes)
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    record_activity(
        activity_log,
        type="USER_STATUS_UPDATED",
        message=f"User status updated: {user['email']}",
        target_type="USER",
        target_id=user_id,
        actor_user_id=admin_id,
        metadata={
            "changes": changes,
            "previous": {key: previous.get(key) for key in changes},
        },
    )
    logger.debug("User {user_id} updated with {changes}", user_id=user_id, changes=changes)
    return envelope(user, message="User status updated successfully")


@router.delete("/{user_id}")
async def delete_user(
    user_id: str = Path(..., min_length=1),
    store: MockAdminStore = Depends(get_store),
    activity_log=Depends(get_activity_log),
    admin_id: str = Depends(require_admin),
) -> Dict[str, Any]:
    """Delete a user unless they still hold pending or confirmed bookings."""
    try:
        user = store.delete_user(user_id)
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StoreConflict as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    record_activity(
        activity_log,
        type="USER_DELETED",
        message=f"User deleted: {user['email']}",
        target_type="USER",
        target_id=user_id,
        actor_user_id=admin_id,
    )
    return envelope(None, message="User deleted successfully")
