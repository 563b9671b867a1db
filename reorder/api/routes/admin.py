"""Admin reorder pages and the ajax endpoint they post to."""

import logging
from typing import Annotated

from fastapi import APIRouter, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse

from reorder.api.deps import DBSession, PostEditor
from reorder.config import settings
from reorder.models.user import ROLE_CAPABILITIES
from reorder.schemas.post import ReorderOutcome
from reorder.services.errors import InvalidNonceError, MalformedOrderError, OutOfScopeError
from reorder.services.nonce import SORT_ACTION, NonceScope, nonce_service
from reorder.services.order_codec import parse_order
from reorder.services.post_service import PostService
from reorder.services.reorder_page import AdminMenu, render_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

OUTCOME_STATUS = {
    ReorderOutcome.FULL: status.HTTP_200_OK,
    ReorderOutcome.PARTIAL: status.HTTP_207_MULTI_STATUS,
    ReorderOutcome.NONE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_admin_menu(request: Request) -> AdminMenu:
    return request.app.state.admin_menu


@router.get("/menu")
async def list_menu(request: Request, current_user: PostEditor) -> list[dict]:
    """List the admin pages the current user can open."""
    menu = get_admin_menu(request)
    capabilities = ROLE_CAPABILITIES.get(current_user.role, frozenset())
    return [
        {
            "parent_slug": entry.parent_slug,
            "page_title": entry.page_title,
            "menu_title": entry.menu_title,
            "slug": entry.slug,
            "url": str(request.url_for("reorder_page", slug=entry.slug)),
        }
        for entry in menu.visible_to(capabilities)
    ]


@router.post("/ajax")
async def admin_ajax(
    current_user: PostEditor,
    db: DBSession,
    action: Annotated[str, Form()],
    nonce: Annotated[str | None, Form()] = None,
    order: Annotated[str | None, Form()] = None,
) -> JSONResponse:
    """Persist the order submitted by the drag-and-drop editor."""
    if action != SORT_ACTION:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown action: {action}",
        )

    try:
        claims = nonce_service.verify(nonce, SORT_ACTION, current_user.id)
    except InvalidNonceError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )

    try:
        parsed = parse_order(order, max_levels=settings.reorder_max_levels)
    except MalformedOrderError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    service = PostService(db)
    try:
        result = await service.persist_order(parsed, claims.scope)
    except OutOfScopeError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Posts outside this list", "ids": e.post_ids},
        )

    return JSONResponse(
        status_code=OUTCOME_STATUS[result.outcome],
        content=result.model_dump(mode="json"),
    )


@router.get("/{slug}", response_class=HTMLResponse, name="reorder_page")
async def reorder_page(
    slug: str,
    request: Request,
    current_user: PostEditor,
    db: DBSession,
) -> HTMLResponse:
    """Render the drag-and-drop page for a registered post type."""
    entry = get_admin_menu(request).get(slug)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Admin page not found",
        )
    if not current_user.has_capability(entry.capability):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Missing capability: {entry.capability}",
        )

    page = entry.page
    service = PostService(db)
    posts = await service.list_posts(page.post_type, page.post_status, page.order)

    nonce = nonce_service.create(
        SORT_ACTION,
        current_user.id,
        NonceScope(post_type=page.post_type, post_status=page.post_status.value),
    )
    html = render_page(
        page,
        posts,
        nonce=nonce,
        ajax_url=str(request.url_for("admin_ajax")),
        static_url=str(request.url_for("static", path="")).rstrip("/"),
        max_levels=settings.reorder_max_levels,
    )
    return HTMLResponse(content=html)
