"""
Content Schemas

Request/response models for content, trending and search.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from media_platform.models.enums import ContentStatus, ContentType
from media_platform.schemas.common import BaseSchema, TimestampMixin


def _strip_genre(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


class ContentCreate(BaseModel):
    """Request to create a content item (defaults to a draft article)."""

    title: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1)
    type: ContentType = ContentType.ARTICLE
    genre: Optional[str] = Field(default=None, max_length=100)
    category_id: int = Field(ge=1)
    status: ContentStatus = ContentStatus.DRAFT

    @field_validator("title", "body")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("genre")
    @classmethod
    def blank_genre_is_none(cls, value: Optional[str]) -> Optional[str]:
        return _strip_genre(value)


class ContentUpdate(BaseModel):
    """Partial update. Omitted fields are unchanged."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    body: Optional[str] = Field(default=None, min_length=1)
    type: Optional[ContentType] = None
    genre: Optional[str] = Field(default=None, max_length=100)
    category_id: Optional[int] = Field(default=None, ge=1)
    status: Optional[ContentStatus] = None

    @field_validator("genre")
    @classmethod
    def blank_genre_is_none(cls, value: Optional[str]) -> Optional[str]:
        return _strip_genre(value)


class ContentStatusUpdate(BaseModel):
    status: ContentStatus


class ContentResponse(BaseSchema, TimestampMixin):
    id: int
    title: str
    body: str
    type: ContentType
    genre: Optional[str] = None
    author_id: int
    category_id: int
    status: ContentStatus
    view_count: int
    published_at: Optional[datetime] = None


class TrendingContentResponse(ContentResponse):
    trending_score: int = Field(description="Popularity tier + freshness tier (0-6)")


class SearchResultResponse(ContentResponse):
    relevance_score: float


class SearchResponse(BaseModel):
    query: str
    data: list[SearchResultResponse]
    limit: int
    offset: int
