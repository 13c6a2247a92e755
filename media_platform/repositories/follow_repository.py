"""
Follow Repository

Follow-graph queries.

Edge Direction:
===============
    followers(user)  = users with an edge  ──► user
    following(user)  = users with an edge  user ──►
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.models.follow import Follow
from media_platform.models.user import User
from media_platform.repositories.base import BaseRepository


class FollowRepository(BaseRepository[Follow]):
    """Repository for Follow database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Follow, session)

    async def get_pair(self, follower_id: int, following_id: int) -> Optional[Follow]:
        result = await self.session.execute(
            select(Follow).where(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id,
            )
        )
        return result.scalar_one_or_none()

    async def is_following(self, follower_id: int, following_id: int) -> bool:
        return await self.get_pair(follower_id, following_id) is not None

    async def list_followers(self, user_id: int, *, offset: int, limit: int) -> tuple[list[User], int]:
        """Users following `user_id`, most recent follow first."""
        query = (
            select(User)
            .join(Follow, Follow.follower_id == User.id)
            .where(Follow.following_id == user_id)
            .order_by(Follow.created_at.desc(), Follow.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all()), await self.count_followers(user_id)

    async def list_following(self, user_id: int, *, offset: int, limit: int) -> tuple[list[User], int]:
        """Users `user_id` follows, most recent follow first."""
        query = (
            select(User)
            .join(Follow, Follow.following_id == User.id)
            .where(Follow.follower_id == user_id)
            .order_by(Follow.created_at.desc(), Follow.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all()), await self.count_following(user_id)

    async def count_followers(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Follow.id)).where(Follow.following_id == user_id)
        )
        return result.scalar() or 0

    async def count_following(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Follow.id)).where(Follow.follower_id == user_id)
        )
        return result.scalar() or 0
