"""
Bookmark and admin statistics schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from media_platform.schemas.common import BaseSchema


class BookmarkCreate(BaseModel):
    content_id: int = Field(ge=1)


class BookmarkResponse(BaseSchema):
    id: int
    user_id: int
    content_id: int
    created_at: datetime


class BookmarkStatusResponse(BaseModel):
    content_id: int
    bookmarked: bool


class LikeStatRow(BaseModel):
    content_id: int
    like_count: int


class FollowStatRow(BaseModel):
    user_id: int
    username: str
    followers_count: int
    following_count: int


class StatsRefreshResponse(BaseModel):
    refreshed: list[str]
