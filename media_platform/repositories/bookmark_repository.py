"""
Bookmark Repository

A user's private saves.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.models.bookmark import Bookmark
from media_platform.repositories.base import BaseRepository


class BookmarkRepository(BaseRepository[Bookmark]):
    """Repository for Bookmark database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Bookmark, session)

    async def get_user_bookmark(self, user_id: int, content_id: int) -> Optional[Bookmark]:
        result = await self.session.execute(
            select(Bookmark).where(Bookmark.user_id == user_id, Bookmark.content_id == content_id)
        )
        return result.scalar_one_or_none()

    async def list_by_user(self, user_id: int, *, offset: int, limit: int) -> tuple[list[Bookmark], int]:
        items = await self.list(offset=offset, limit=limit, filters={"user_id": user_id}, order_by="created_at")
        return items, await self.count(filters={"user_id": user_id})
