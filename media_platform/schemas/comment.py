"""
Comment Schemas
"""

from typing import Optional

from pydantic import BaseModel, Field

from media_platform.schemas.common import BaseSchema, TimestampMixin


class CommentCreate(BaseModel):
    content_id: int = Field(ge=1)
    body: str = Field(min_length=1, max_length=1000)
    parent_id: Optional[int] = Field(default=None, ge=1)


class CommentUpdate(BaseModel):
    body: str = Field(min_length=1, max_length=1000)


class CommentResponse(BaseSchema, TimestampMixin):
    id: int
    body: str
    user_id: int
    content_id: int
    parent_id: Optional[int] = None


class CommentThreadResponse(CommentResponse):
    """A top-level comment with its first replies."""

    replies: list[CommentResponse] = Field(default_factory=list)
