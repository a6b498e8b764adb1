"""FastAPI dependency helpers."""

from typing import Any, Dict, List, Optional

from fastapi import Depends, Header, HTTPException, Request, status

from admin_backend.app.config import Settings, get_settings
from admin_backend.app.services.mock_store import MockAdminStore


def get_app_settings() -> Settings:
    """Provide application settings."""
    return get_settings()


def get_store(request: Request) -> MockAdminStore:
    """Retrieve the in-memory admin store from app state."""
    store: MockAdminStore = request.app.state.store  # type: ignore[attr-defined]
    return store


def get_activity_log(request: Request) -> List[Dict[str, Any]]:
    """Return activity log stored in app state."""
    log: List[Dict[str, Any]] = request.app.state.activity_log  # type: ignore[attr-defined]
    return log


def require_admin(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """Check the bearer token and return the acting admin's user id."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    if token != settings.admin_api_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
    return settings.admin_user_id


def page_limit(limit: int, settings: Settings) -> int:
    """Clamp a requested page size to the configured maximum."""
    return min(limit, settings.max_page_size)


def envelope(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return body
