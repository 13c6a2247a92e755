"""
Service Dependencies

One service instance per request, bound to that request's session.

Usage:
======
    from media_platform.api.dependencies.services import get_follow_service

    @router.post("")
    async def follow(data: FollowCreate, service: FollowService = Depends(get_follow_service)):
        ...
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.api.dependencies.database import get_db
from media_platform.services import (
    AuthService,
    BookmarkService,
    CategoryService,
    CommentService,
    ContentService,
    FollowService,
    RatingService,
    StatsService,
    UserService,
)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


async def get_content_service(db: AsyncSession = Depends(get_db)) -> ContentService:
    return ContentService(db)


async def get_comment_service(db: AsyncSession = Depends(get_db)) -> CommentService:
    return CommentService(db)


async def get_rating_service(db: AsyncSession = Depends(get_db)) -> RatingService:
    return RatingService(db)


async def get_follow_service(db: AsyncSession = Depends(get_db)) -> FollowService:
    return FollowService(db)


async def get_bookmark_service(db: AsyncSession = Depends(get_db)) -> BookmarkService:
    return BookmarkService(db)


async def get_stats_service(db: AsyncSession = Depends(get_db)) -> StatsService:
    return StatsService(db)
