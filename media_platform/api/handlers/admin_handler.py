"""
Admin Handler

Maintenance of the materialized views (`like_stats`, `user_follow_stats`,
`following_feed_contents`). Admin only.
"""

from fastapi import APIRouter, Depends

from media_platform.api.dependencies import AdminUser, Pagination
from media_platform.api.dependencies.services import get_stats_service
from media_platform.schemas.bookmark import FollowStatRow, LikeStatRow, StatsRefreshResponse
from media_platform.services.stats_service import StatsService


router = APIRouter()


@router.post("/stats/refresh", response_model=StatsRefreshResponse)
async def refresh_stats(
    _admin: AdminUser,
    stats_service: StatsService = Depends(get_stats_service),
):
    """REFRESH MATERIALIZED VIEW CONCURRENTLY on every materialized view."""
    return StatsRefreshResponse(refreshed=await stats_service.refresh())


@router.get("/stats/likes", response_model=list[LikeStatRow])
async def like_stats(
    _admin: AdminUser,
    page: Pagination,
    stats_service: StatsService = Depends(get_stats_service),
):
    """Snapshot as of the last refresh, most liked first."""
    return await stats_service.like_stats(offset=page.offset, limit=page.limit)


@router.get("/stats/follows", response_model=list[FollowStatRow])
async def follow_stats(
    _admin: AdminUser,
    page: Pagination,
    stats_service: StatsService = Depends(get_stats_service),
):
    return await stats_service.follow_stats(offset=page.offset, limit=page.limit)
