"""Report and analytics endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from admin_backend.app.api.deps import envelope, get_store, require_admin
from admin_backend.app.services.mock_store import MockAdminStore
from admin_backend.app.services.reporting import REPORTS, ReportRangeError, analytics

router = APIRouter(prefix="/api/admin", tags=["reports"])


@router.get("/reports/{report_type}")
async def report(
    report_type: str,
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    group_by: str = Query(default="day", alias="groupBy", pattern="^(day|week|month)$"),
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    """Revenue, bookings or activity totals bucketed by day, week or month."""
    builder = REPORTS.get(report_type)
    if builder is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown report type")
    try:
        result = builder(store, start_date, end_date, group_by)
    except ReportRangeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return envelope(result)


@router.get("/analytics")
async def analytics_overview(
    period: str = Query(default="30d", pattern="^(7d|30d|90d)$"),
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    return envelope(analytics(store, period))
