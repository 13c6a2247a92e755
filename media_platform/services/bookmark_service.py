"""
Bookmark Service

Private saves of content items, one per (user, content). Only content the
user can see may be bookmarked.
"""

from typing import Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.exceptions import (
    AuthorizationError,
    BookmarkNotFoundError,
    ContentNotFoundError,
    DuplicateResourceError,
)
from media_platform.core.logging import logger
from media_platform.models.bookmark import Bookmark
from media_platform.repositories.bookmark_repository import BookmarkRepository
from media_platform.repositories.content_repository import ContentRepository


class BookmarkService:
    """Service for bookmarks."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = BookmarkRepository(session)
        self.content_repo = ContentRepository(session)

    async def list_bookmarks(self, user_id: int, *, offset: int, limit: int) -> Tuple[list[Bookmark], int]:
        return await self.repo.list_by_user(user_id, offset=offset, limit=limit)

    async def create_bookmark(self, user_id: int, content_id: int, role: str = "user") -> Bookmark:
        content = await self.content_repo.get(content_id)
        if not content or not content.is_visible_to(user_id, role):
            raise ContentNotFoundError(content_id)
        if await self.repo.get_user_bookmark(user_id, content_id):
            raise DuplicateResourceError("Content is already bookmarked")

        bookmark = await self.repo.create(user_id=user_id, content_id=content_id)
        logger.info("Bookmark created", bookmark_id=bookmark.id, content_id=content_id)
        return bookmark

    async def delete_bookmark(self, bookmark_id: int, user_id: int, role: str) -> None:
        bookmark = await self.repo.get(bookmark_id)
        if not bookmark:
            raise BookmarkNotFoundError(bookmark_id)
        if not bookmark.can_edit(user_id, role):
            raise AuthorizationError("Only the bookmark owner or an admin can remove this bookmark")
        await self.repo.delete_instance(bookmark)

    async def toggle(self, user_id: int, content_id: int, role: str = "user") -> bool:
        """Returns True when the content is bookmarked after the call."""
        existing = await self.repo.get_user_bookmark(user_id, content_id)
        if existing:
            await self.repo.delete_instance(existing)
            return False
        await self.create_bookmark(user_id, content_id, role)
        return True

    async def is_bookmarked(self, user_id: int, content_id: int) -> bool:
        return await self.repo.get_user_bookmark(user_id, content_id) is not None
