"""
Common Schemas

Shared schemas used across the API for consistent responses.

Schema Types:
=============
- BaseSchema: Base with common config (from_attributes, populate_by_name)
- Pagination: limit/offset parameters and response metadata
- Generic Responses: PaginatedResponse[T], MessageResponse, ErrorResponse

Usage:
======
    from media_platform.schemas.common import PaginatedResponse, PaginationMeta

    return PaginatedResponse[CategoryResponse](
        data=items,
        pagination=PaginationMeta.create(limit=20, offset=0, total=57),
    )
"""

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


DataT = TypeVar("DataT")

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    Provides:
    - from_attributes: Build straight from ORM models
    - populate_by_name: Allow field population by name or alias
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ═══════════════════════════════════════════════════════════════════════════════


class PaginationParams(BaseModel):
    """
    limit/offset query parameters.

    Out-of-range values are rejected with 400, never clamped:
        limit=0 → 400, limit=101 → 400, offset=-1 → 400
    An offset past the end simply returns an empty page.
    """

    limit: int = Field(
        default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page (1-100)"
    )
    offset: int = Field(default=0, ge=0, description="Items to skip")


class PaginationMeta(BaseModel):
    """Pagination metadata in list responses."""

    limit: int = Field(description="Requested page size")
    offset: int = Field(description="Items skipped")
    total: int = Field(description="Total number of matching items")
    has_more: bool = Field(description="Whether another page exists")

    @classmethod
    def create(cls, limit: int, offset: int, total: int) -> "PaginationMeta":
        return cls(limit=limit, offset=offset, total=total, has_more=offset + limit < total)


class PaginatedResponse(BaseModel, Generic[DataT]):
    """
    Generic paginated response.

    Example:
        {"data": [...], "pagination": {"limit": 20, "offset": 0, "total": 57, "has_more": true}}
    """

    data: list[DataT]
    pagination: PaginationMeta


# ═══════════════════════════════════════════════════════════════════════════════
# STANDARD RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    """Simple message response for success confirmations."""

    message: str
    success: bool = True


class ErrorDetail(BaseModel):
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(default=None, description="Additional error context")


class ErrorResponse(BaseModel):
    """
    Standard error envelope returned by every failing endpoint.

    Example:
        {"error": {"code": "CONFLICT", "message": "You are already following this user", "details": {}}}
    """

    error: ErrorDetail


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "media_platform"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ReadinessResponse(BaseModel):
    status: str
    database: str


# ═══════════════════════════════════════════════════════════════════════════════
# MIXINS
# ═══════════════════════════════════════════════════════════════════════════════


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields in responses."""

    created_at: datetime
    updated_at: datetime
