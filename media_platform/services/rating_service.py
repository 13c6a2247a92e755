"""
Rating Service

Likes. A user likes a content item at most once; liking twice through the
create endpoint is a conflict, while the toggle endpoint flips state.
Unpublished items behave as missing for everyone but their author and admins.

Stats Shapes:
=============
    content stats   {"content_id": 42, "like_count": 17, "count": 17}
    bulk stats      {"stats": {"42": 17, "43": 0}}  (missing ids → 0)
    user status     {"content_id": 42, "liked": true, "rating_id": 901}
"""

from typing import Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.exceptions import (
    AuthorizationError,
    ContentNotFoundError,
    DuplicateResourceError,
    RatingNotFoundError,
    UserNotFoundError,
)
from media_platform.core.logging import logger
from media_platform.models.content import Content
from media_platform.models.rating import LIKE_VALUE, Rating
from media_platform.repositories.content_repository import ContentRepository
from media_platform.repositories.rating_repository import RatingRepository
from media_platform.repositories.user_repository import UserRepository


class RatingService:
    """Service for likes."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = RatingRepository(session)
        self.content_repo = ContentRepository(session)
        self.user_repo = UserRepository(session)

    async def like(self, user_id: int, content_id: int, role: str = "user") -> Rating:
        """
        Raises:
            ContentNotFoundError: Content does not exist or is not visible to the user
            DuplicateResourceError: Already liked
        """
        await self._require_content(content_id, user_id, role)
        if await self.repo.get_user_rating(user_id, content_id):
            raise DuplicateResourceError("You have already liked this content")

        rating = await self.repo.create(user_id=user_id, content_id=content_id, value=LIKE_VALUE)
        logger.info("Content liked", content_id=content_id, user_id=user_id)
        return rating

    async def toggle(self, user_id: int, content_id: int, role: str = "user") -> Tuple[bool, int]:
        """
        Like if not liked, unlike otherwise.

        Returns:
            (liked_after_toggle, like_count)
        """
        await self._require_content(content_id, user_id, role)
        existing = await self.repo.get_user_rating(user_id, content_id)
        if existing:
            await self.repo.delete_instance(existing)
            liked = False
        else:
            await self.repo.create(user_id=user_id, content_id=content_id, value=LIKE_VALUE)
            liked = True

        logger.info("Like toggled", content_id=content_id, user_id=user_id, liked=liked)
        return liked, await self.repo.count_for_content(content_id)

    async def delete_rating(self, rating_id: int, user_id: int, role: str) -> None:
        rating = await self.repo.get(rating_id)
        if not rating:
            raise RatingNotFoundError(rating_id)
        if rating.user_id != user_id and role != "admin":
            raise AuthorizationError("Only the rating owner or an admin can remove this rating")
        await self.repo.delete_instance(rating)

    async def list_for_content(
        self,
        content_id: int,
        *,
        offset: int,
        limit: int,
        viewer_id: Optional[int] = None,
        viewer_role: Optional[str] = None,
    ) -> Tuple[list[Rating], int]:
        await self._require_content(content_id, viewer_id, viewer_role)
        return await self.repo.list_by_content(content_id, offset=offset, limit=limit)

    async def list_for_user(self, user_id: int, *, offset: int, limit: int) -> Tuple[list[Rating], int]:
        await self._require_user(user_id)
        return await self.repo.list_by_user(user_id, offset=offset, limit=limit)

    async def liked_contents(self, user_id: int, *, offset: int, limit: int) -> Tuple[list[Content], int]:
        await self._require_user(user_id)
        return await self.content_repo.list_liked_by(user_id, offset=offset, limit=limit)

    async def content_stats(
        self, content_id: int, viewer_id: Optional[int] = None, viewer_role: Optional[str] = None
    ) -> dict[str, int]:
        await self._require_content(content_id, viewer_id, viewer_role)
        like_count = await self.repo.count_for_content(content_id)
        return {"content_id": content_id, "like_count": like_count, "count": like_count}

    async def bulk_stats(self, content_ids: Sequence[int]) -> dict[int, int]:
        counts = await self.repo.counts_for_contents(list(dict.fromkeys(content_ids)))
        return {content_id: counts.get(content_id, 0) for content_id in content_ids}

    async def user_status(self, user_id: int, content_id: int, role: str = "user") -> Tuple[bool, Optional[int]]:
        await self._require_content(content_id, user_id, role)
        rating = await self.repo.get_user_rating(user_id, content_id)
        return rating is not None, rating.id if rating else None

    async def top_contents(self, *, limit: int, days: int) -> list[Tuple[Content, int]]:
        return await self.content_repo.top_liked(limit=limit, days=days)

    async def _require_content(self, content_id: int, viewer_id: Optional[int], viewer_role: Optional[str]) -> None:
        content = await self.content_repo.get(content_id)
        if not content or not content.is_visible_to(viewer_id, viewer_role):
            raise ContentNotFoundError(content_id)

    async def _require_user(self, user_id: int) -> None:
        if not await self.user_repo.exists(user_id):
            raise UserNotFoundError(user_id)
