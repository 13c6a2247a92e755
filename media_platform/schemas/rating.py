"""
Rating Schemas
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from media_platform.schemas.common import BaseSchema
from media_platform.schemas.content import ContentResponse


class RatingCreate(BaseModel):
    content_id: int = Field(ge=1)
    # Likes only; kept in the body for clients that send it
    value: int = Field(default=1, ge=1, le=1)


class RatingResponse(BaseSchema):
    id: int
    user_id: int
    content_id: int
    value: int
    created_at: datetime


class RatingStatsResponse(BaseModel):
    content_id: int
    like_count: int
    count: int


class BulkStatsRequest(BaseModel):
    content_ids: list[int] = Field(min_length=1, max_length=100)


class BulkStatsResponse(BaseModel):
    stats: dict[int, int]


class ToggleLikeResponse(BaseModel):
    content_id: int
    liked: bool
    like_count: int


class UserRatingStatusResponse(BaseModel):
    content_id: int
    liked: bool
    rating_id: Optional[int] = None


class TopContentResponse(ContentResponse):
    like_count: int
