"""Service for listing posts and persisting their menu order."""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reorder.models.post import Post, PostStatus
from reorder.schemas.post import FailedWrite, ReorderResult, SortDirection
from reorder.services.errors import OutOfScopeError
from reorder.services.nonce import NonceScope
from reorder.services.order_codec import OrderEntry, ParsedOrder

logger = logging.getLogger(__name__)


class PostService:
    """Service for post listing and reordering."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_posts(
        self,
        post_type: str,
        post_status: PostStatus | str = PostStatus.PUBLISH,
        direction: SortDirection | str = SortDirection.ASC,
    ) -> list[Post]:
        """List all posts of one type and status ordered by menu_order."""
        direction = SortDirection(direction)
        order_column = Post.menu_order.asc() if direction == SortDirection.ASC else Post.menu_order.desc()

        result = await self.db.execute(
            select(Post)
            .where(
                Post.post_type == post_type,
                Post.post_status == PostStatus(post_status),
            )
            .order_by(order_column, Post.id)
        )
        return list(result.scalars().all())

    async def _ids_in_scope(self, post_ids: list[int], scope: NonceScope) -> set[int]:
        """Return the subset of ids belonging to the scope's type and status."""
        result = await self.db.execute(
            select(Post.id).where(
                Post.id.in_(post_ids),
                Post.post_type == scope.post_type,
                Post.post_status == PostStatus(scope.post_status),
            )
        )
        return set(result.scalars().all())

    async def _write_order(self, entry: OrderEntry, menu_order: int, with_parent: bool) -> int:
        """Update one post and return the number of rows changed."""
        values: dict = {"menu_order": menu_order}
        if with_parent:
            values["parent_id"] = entry.parent_id

        result = await self.db.execute(
            update(Post).where(Post.id == entry.post_id).values(**values)
        )
        return result.rowcount

    async def persist_order(self, order: ParsedOrder, scope: NonceScope) -> ReorderResult:
        """Assign descending menu_order values in submission order.

        The first post gets ``len(order)``, the last gets 1. Posts missing from
        the submission keep their value. Each write runs in its own savepoint
        so one failure does not undo the others; failures are reported in the
        result rather than raised.

        Raises:
            OutOfScopeError: if any id is outside the scope's list. Nothing is
                written in that case.
        """
        total = len(order)
        if total == 0:
            return ReorderResult(total=0, written=0)

        in_scope = await self._ids_in_scope(order.post_ids, scope)
        missing = [post_id for post_id in order.post_ids if post_id not in in_scope]
        if missing:
            logger.warning(
                f"Rejected reorder of {scope.post_type}/{scope.post_status}: "
                f"{len(missing)} post(s) outside the list"
            )
            raise OutOfScopeError(missing)

        written = 0
        failed: list[FailedWrite] = []
        for idx, entry in enumerate(order.entries):
            try:
                async with self.db.begin_nested():
                    updated = await self._write_order(entry, total - idx, order.hierarchical)
            except SQLAlchemyError as e:
                logger.error(f"Failed to write menu_order for post {entry.post_id}: {e}", exc_info=True)
                failed.append(FailedWrite(id=entry.post_id, error=str(e.__class__.__name__)))
                continue

            if updated:
                written += 1
            else:
                # Deleted since the scope check.
                logger.warning(f"Post {entry.post_id} disappeared before its menu_order was written")
                failed.append(FailedWrite(id=entry.post_id, error="NotFound"))

        await self.db.flush()

        result = ReorderResult(total=total, written=written, failed=failed)
        logger.info(
            f"Reordered {scope.post_type}/{scope.post_status}: "
            f"{written}/{total} written ({result.outcome.value})"
        )
        return result
