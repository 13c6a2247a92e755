"""
Stats Service

Admin access to the materialized like/follow statistics.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.logging import logger
from media_platform.repositories.stats_repository import StatsRepository


class StatsService:
    """Service for the statistics views."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = StatsRepository(session)

    async def refresh(self) -> list[str]:
        views = await self.repo.refresh()
        logger.info("Statistics views refreshed", views=views)
        return views

    async def like_stats(self, *, offset: int, limit: int) -> list[dict[str, Any]]:
        return await self.repo.like_stats(offset=offset, limit=limit)

    async def follow_stats(self, *, offset: int, limit: int) -> list[dict[str, Any]]:
        return await self.repo.follow_stats(offset=offset, limit=limit)
