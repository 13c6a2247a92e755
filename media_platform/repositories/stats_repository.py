"""
Stats Repository

Reads and refreshes the materialized statistics views created in
migration 003:

    like_stats(content_id, like_count)
    user_follow_stats(user_id, username, followers_count, following_count)
    following_feed_contents(follower_id, content_id, ...)

All three carry a unique index so they can be refreshed CONCURRENTLY
without blocking readers.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession


MATERIALIZED_VIEWS = ("like_stats", "user_follow_stats", "following_feed_contents")


class StatsRepository:
    """Raw-SQL access to the statistics views."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def refresh(self) -> list[str]:
        for view in MATERIALIZED_VIEWS:
            await self.session.execute(text(f"REFRESH MATERIALIZED VIEW CONCURRENTLY {view}"))
        return list(MATERIALIZED_VIEWS)

    async def like_stats(self, *, offset: int, limit: int) -> list[dict[str, Any]]:
        result = await self.session.execute(
            text(
                "SELECT content_id, like_count FROM like_stats "
                "ORDER BY like_count DESC, content_id ASC "
                "OFFSET :result_offset LIMIT :result_limit"
            ),
            {"result_offset": offset, "result_limit": limit},
        )
        return [dict(row) for row in result.mappings().all()]

    async def follow_stats(self, *, offset: int, limit: int) -> list[dict[str, Any]]:
        result = await self.session.execute(
            text(
                "SELECT user_id, username, followers_count, following_count "
                "FROM user_follow_stats "
                "ORDER BY followers_count DESC, user_id ASC "
                "OFFSET :result_offset LIMIT :result_limit"
            ),
            {"result_offset": offset, "result_limit": limit},
        )
        return [dict(row) for row in result.mappings().all()]
