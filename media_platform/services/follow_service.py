"""
Follow Service

Maintains the follow graph.

Rules:
======
    follow(a, a)              → ValidationError (also a DB CHECK)
    follow(a, missing)        → UserNotFoundError
    follow(a, b) twice        → DuplicateResourceError (also a DB UNIQUE)
    unfollow(a, b) w/o edge   → FollowNotFoundError
"""

from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.exceptions import (
    DuplicateResourceError,
    FollowNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from media_platform.core.logging import logger
from media_platform.models.follow import Follow
from media_platform.models.user import User
from media_platform.repositories.follow_repository import FollowRepository
from media_platform.repositories.user_repository import UserRepository


class FollowService:
    """Service for follows."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = FollowRepository(session)
        self.user_repo = UserRepository(session)

    async def follow(self, follower_id: int, following_id: int) -> Follow:
        if follower_id == following_id:
            raise ValidationError("You cannot follow yourself", details={"field": "following_id"})
        await self._require_user(following_id)
        if await self.repo.is_following(follower_id, following_id):
            raise DuplicateResourceError("You are already following this user")

        follow = await self.repo.create(follower_id=follower_id, following_id=following_id)
        logger.info("Follow created", follower_id=follower_id, following_id=following_id)
        return follow

    async def unfollow(self, follower_id: int, following_id: int) -> None:
        follow = await self.repo.get_pair(follower_id, following_id)
        if not follow:
            raise FollowNotFoundError()
        await self.repo.delete_instance(follow)
        logger.info("Follow removed", follower_id=follower_id, following_id=following_id)

    async def followers(self, user_id: int, *, offset: int, limit: int) -> Tuple[list[User], int]:
        await self._require_user(user_id)
        return await self.repo.list_followers(user_id, offset=offset, limit=limit)

    async def following(self, user_id: int, *, offset: int, limit: int) -> Tuple[list[User], int]:
        await self._require_user(user_id)
        return await self.repo.list_following(user_id, offset=offset, limit=limit)

    async def stats(self, user_id: int, viewer_id: Optional[int] = None) -> dict:
        """
        Follower/following counts; relationship flags relative to the viewer
        when one is authenticated.
        """
        await self._require_user(user_id)
        is_following = is_followed_by = False
        if viewer_id is not None and viewer_id != user_id:
            is_following = await self.repo.is_following(viewer_id, user_id)
            is_followed_by = await self.repo.is_following(user_id, viewer_id)

        return {
            "user_id": user_id,
            "followers_count": await self.repo.count_followers(user_id),
            "following_count": await self.repo.count_following(user_id),
            "is_following": is_following,
            "is_followed_by": is_followed_by,
            "is_mutual_follow": is_following and is_followed_by,
        }

    async def _require_user(self, user_id: int) -> None:
        if not await self.user_repo.exists(user_id):
            raise UserNotFoundError(user_id)
