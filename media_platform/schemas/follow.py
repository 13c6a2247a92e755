"""
Follow Schemas
"""

from datetime import datetime

from pydantic import BaseModel, Field

from media_platform.schemas.common import BaseSchema


class FollowCreate(BaseModel):
    following_id: int = Field(ge=1)


class FollowResponse(BaseSchema):
    id: int
    follower_id: int
    following_id: int
    created_at: datetime


class FollowStatsResponse(BaseModel):
    user_id: int
    followers_count: int
    following_count: int
    is_following: bool = False
    is_followed_by: bool = False
    is_mutual_follow: bool = False
