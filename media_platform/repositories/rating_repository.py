"""
Rating Repository

Like lookups and like counters.
"""

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.models.rating import Rating
from media_platform.repositories.base import BaseRepository


class RatingRepository(BaseRepository[Rating]):
    """Repository for Rating database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Rating, session)

    async def get_user_rating(self, user_id: int, content_id: int) -> Optional[Rating]:
        result = await self.session.execute(
            select(Rating).where(Rating.user_id == user_id, Rating.content_id == content_id)
        )
        return result.scalar_one_or_none()

    async def list_by_content(self, content_id: int, *, offset: int, limit: int) -> tuple[list[Rating], int]:
        items = await self.list(offset=offset, limit=limit, filters={"content_id": content_id}, order_by="created_at")
        return items, await self.count(filters={"content_id": content_id})

    async def list_by_user(self, user_id: int, *, offset: int, limit: int) -> tuple[list[Rating], int]:
        items = await self.list(offset=offset, limit=limit, filters={"user_id": user_id}, order_by="created_at")
        return items, await self.count(filters={"user_id": user_id})

    async def count_for_content(self, content_id: int) -> int:
        return await self.count(filters={"content_id": content_id})

    async def counts_for_contents(self, content_ids: Sequence[int]) -> dict[int, int]:
        """
        Like counts for many items at once; items without likes are omitted.

        SQL Generated:
            SELECT content_id, count(*) FROM ratings
            WHERE content_id IN (...) GROUP BY content_id
        """
        if not content_ids:
            return {}
        result = await self.session.execute(
            select(Rating.content_id, func.count(Rating.id))
            .where(Rating.content_id.in_(content_ids))
            .group_by(Rating.content_id)
        )
        return {content_id: total for content_id, total in result.all()}
