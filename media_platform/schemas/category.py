"""
Category Schemas
"""

from typing import Optional

from pydantic import BaseModel, Field

from media_platform.schemas.common import BaseSchema, TimestampMixin


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    parent_id: Optional[int] = Field(default=None, ge=1)


class CategoryUpdate(BaseModel):
    """Omitted fields are unchanged; an explicit `parent_id: null` detaches the category."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    parent_id: Optional[int] = Field(default=None, ge=1)


class CategoryResponse(BaseSchema, TimestampMixin):
    id: int
    name: str
    description: Optional[str] = None
    parent_id: Optional[int] = None


class CategoryDetailResponse(CategoryResponse):
    children: list[CategoryResponse] = Field(default_factory=list)
