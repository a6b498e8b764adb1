"""Entrypoint for the travel admin mock API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from admin_backend.app.api import bookings, dashboard, help, listings, reports, settings, system, users
from admin_backend.app.config import Settings, get_settings
from admin_backend.app.services.mock_store import MockAdminStore


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup/shutdown routines."""
    app_settings: Settings = get_settings()
    store = MockAdminStore(app_settings)

    app.state.settings = app_settings  # type: ignore[attr-defined]
    app.state.store = store  # type: ignore[attr-defined]
    app.state.activity_log = store.activity_log  # type: ignore[attr-defined]

    logger.info(
        "Starting admin mock API (seeded = {seeded})",
        seeded=app_settings.seed_demo_data,
    )
    try:
        yield
    finally:
        logger.info("Admin mock API shutdown complete")


app = FastAPI(
    title="Travel Admin Mock API",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors in the ``{success, error}`` envelope."""
    if exc.status_code >= 500:
        logger.error("{method} {path} failed: {detail}", method=request.method, path=request.url.path, detail=exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid request")
    logger.warning(
        "Rejected {method} {path}: {message}",
        method=request.method,
        path=request.url.path,
        message=message,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": f"{field}: {message}" if field else message,
        },
    )


app.include_router(system.router)
app.include_router(dashboard.router)
app.include_router(users.router)
app.include_router(bookings.router)
app.include_router(listings.accommodations_router)
app.include_router(listings.transportation_router)
app.include_router(listings.tours_router)
app.include_router(settings.router)
app.include_router(reports.router)
app.include_router(help.router)


@app.get("/")
async def root() -> Dict[str, str]:
    """Simple root endpoint for manual verification."""
    return {"message": "Travel admin mock API is running"}
