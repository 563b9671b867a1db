"""Post listing routes."""

from fastapi import APIRouter

from reorder.api.deps import DBSession, PostEditor
from reorder.models.post import Post, PostStatus
from reorder.schemas.post import PostResponse, SortDirection
from reorder.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostResponse])
async def list_posts(
    current_user: PostEditor,
    db: DBSession,
    post_type: str = "post",
    post_status: PostStatus = PostStatus.PUBLISH,
    order: SortDirection = SortDirection.ASC,
) -> list[Post]:
    """List the posts of one type and status in menu order."""
    service = PostService(db)
    return await service.list_posts(post_type, post_status, order)
