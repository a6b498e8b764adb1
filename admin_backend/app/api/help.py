"""Help center endpoints: categories, articles, support tickets, diagnostics."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from admin_backend.app.api.activity import record_activity
from admin_backend.app.api.deps import (
    envelope,
    get_activity_log,
    get_app_settings,
    get_store,
    require_admin,
)
from admin_backend.app.config import Settings
from admin_backend.app.models.content import (
    HelpArticleRequest,
    HelpCategoryRequest,
    SupportTicketRequest,
)
from admin_backend.app.services.mock_store import MockAdminStore, RecordNotFound

router = APIRouter(prefix="/api/admin/help", tags=["help"])


def _not_found(exc: RecordNotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("/categories")
async def list_categories(
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    return envelope(store.list_help_categories())


@router.post("/categories", status_code=status.HTTP_201_CREATED)
async def create_category(
    request: HelpCategoryRequest,
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    return envelope(store.create_help_category(request.model_dump()), message="Category created")


@router.get("/articles")
async def list_articles(
    category: Optional[str] = None,
    search: Optional[str] = None,
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    return envelope(store.list_help_articles(category=category, search=search))


@router.get("/articles/{article_id}")
async def get_article(
    article_id: str = Path(..., min_length=1),
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    try:
        return envelope(store.get_help_article(article_id))
    except RecordNotFound as exc:
        raise _not_found(exc) from exc


@router.post("/articles", status_code=status.HTTP_201_CREATED)
async def create_article(
    request: HelpArticleRequest,
    store: MockAdminStore = Depends(get_store),
    activity_log=Depends(get_activity_log),
    admin_id: str = Depends(require_admin),
) -> Dict[str, Any]:
    try:
        article = store.create_help_article(request.to_payload())
    except RecordNotFound as exc:
        raise _not_found(exc) from exc
    record_activity(
        activity_log,
        type="HELP_ARTICLE_CREATED",
        message=f"Help article created: {article['title']}",
        target_type="HELP_ARTICLE",
        target_id=article["id"],
        actor_user_id=admin_id,
    )
    return envelope(article, message="Article created")


@router.put("/articles/{article_id}")
async def update_article(
    request: HelpArticleRequest,
    article_id: str = Path(..., min_length=1),
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    try:
        article = store.update_help_article(article_id, request.to_payload())
    except RecordNotFound as exc:
        raise _not_found(exc) from exc
    return envelope(article, message="Article updated")


@router.delete("/articles/{article_id}")
async def delete_article(
    article_id: str = Path(..., min_length=1),
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    try:
        store.delete_help_article(article_id)
    except RecordNotFound as exc:
        raise _not_found(exc) from exc
    return envelope(None, message="Article deleted")


@router.get("/tickets")
async def list_tickets(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    priority: Optional[str] = None,
    category: Optional[str] = None,
    store: MockAdminStore = Depends(get_store),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    """Support tickets, newest first, with status/priority/category filters."""
    return envelope(
        store.list_support_tickets(
            page=page,
            limit=limit,
            status=status_filter,
            priority=priority,
            category=category,
        )
    )


@router.post("/tickets", status_code=status.HTTP_201_CREATED)
async def create_ticket(
    request: SupportTicketRequest,
    store: MockAdminStore = Depends(get_store),
    activity_log=Depends(get_activity_log),
    admin_id: str = Depends(require_admin),
) -> Dict[str, Any]:
    payload = request.model_dump()
    payload["priority"] = request.priority.value
    ticket = store.create_support_ticket(payload, submitted_by=admin_id)
    record_activity(
        activity_log,
        type="SUPPORT_TICKET_CREATED",
        message=f"Support ticket opened: {ticket['subject']}",
        target_type="SUPPORT_TICKET",
        target_id=ticket["id"],
        actor_user_id=admin_id,
    )
    return envelope(ticket, message="Support ticket submitted")


@router.get("/diagnostics")
async def diagnostics(
    store: MockAdminStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    _admin: str = Depends(require_admin),
) -> Dict[str, Any]:
    return envelope(store.diagnostics(settings.environment))
