"""
Comment Repository

Threaded comment queries.

Thread Shape:
=============
    list_roots(content_id)         top-level comments, oldest first
    list_replies_for(root_ids, n)  first n replies of each root, one query
    list_replies(parent_id)        full reply page for one comment
"""

from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.models.comment import Comment
from media_platform.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Comment, session)

    async def list_roots(self, content_id: int, *, offset: int, limit: int) -> tuple[list[Comment], int]:
        clauses = [Comment.content_id == content_id, Comment.parent_id.is_(None)]
        result = await self.session.execute(
            select(Comment)
            .where(*clauses)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .offset(offset)
            .limit(limit)
        )
        total = await self.session.execute(select(func.count(Comment.id)).where(*clauses))
        return list(result.scalars().all()), total.scalar() or 0

    async def list_replies(self, parent_id: int, *, offset: int, limit: int) -> tuple[list[Comment], int]:
        result = await self.session.execute(
            select(Comment)
            .where(Comment.parent_id == parent_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .offset(offset)
            .limit(limit)
        )
        total = await self.session.execute(
            select(func.count(Comment.id)).where(Comment.parent_id == parent_id)
        )
        return list(result.scalars().all()), total.scalar() or 0

    async def list_replies_for(self, parent_ids: Iterable[int], per_parent: int) -> dict[int, list[Comment]]:
        """
        First `per_parent` replies of each parent, in a single query.

        SQL Generated:
            SELECT * FROM (
                SELECT comments.*, row_number() OVER (
                    PARTITION BY parent_id ORDER BY created_at, id) AS rn
                FROM comments WHERE parent_id IN (...)
            ) WHERE rn <= :per_parent
        """
        ids = list(parent_ids)
        if not ids:
            return {}

        row_number = (
            func.row_number()
            .over(partition_by=Comment.parent_id, order_by=(Comment.created_at.asc(), Comment.id.asc()))
            .label("rn")
        )
        ranked = select(Comment.id, row_number).where(Comment.parent_id.in_(ids)).subquery()
        result = await self.session.execute(
            select(Comment)
            .join(ranked, ranked.c.id == Comment.id)
            .where(ranked.c.rn <= per_parent)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )

        replies: dict[int, list[Comment]] = {parent_id: [] for parent_id in ids}
        for reply in result.scalars().all():
            replies[reply.parent_id].append(reply)
        return replies
