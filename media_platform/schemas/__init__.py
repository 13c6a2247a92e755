"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schemas, pagination, error responses
- user: Accounts, authentication, notification settings
- category, content, comment, rating, follow, bookmark: one module per resource

Usage:
======
    from media_platform.schemas import ContentCreate, ContentResponse, PaginatedResponse
"""

from media_platform.schemas.common import (
    BaseSchema,
    PaginationParams,
    PaginationMeta,
    PaginatedResponse,
    MessageResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    ReadinessResponse,
)
from media_platform.schemas.user import (
    UserCreate,
    UserLogin,
    UserUpdate,
    AdminUserUpdate,
    UserPublicResponse,
    UserResponse,
    AuthResponse,
    NotificationSettingsResponse,
    NotificationSettingsUpdate,
)
from media_platform.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryDetailResponse,
)
from media_platform.schemas.content import (
    ContentCreate,
    ContentUpdate,
    ContentStatusUpdate,
    ContentResponse,
    TrendingContentResponse,
    SearchResultResponse,
    SearchResponse,
)
from media_platform.schemas.comment import (
    CommentCreate,
    CommentUpdate,
    CommentResponse,
    CommentThreadResponse,
)
from media_platform.schemas.rating import (
    RatingCreate,
    RatingResponse,
    RatingStatsResponse,
    BulkStatsRequest,
    BulkStatsResponse,
    ToggleLikeResponse,
    UserRatingStatusResponse,
    TopContentResponse,
)
from media_platform.schemas.follow import (
    FollowCreate,
    FollowResponse,
    FollowStatsResponse,
)
from media_platform.schemas.bookmark import (
    BookmarkCreate,
    BookmarkResponse,
    BookmarkStatusResponse,
    LikeStatRow,
    FollowStatRow,
    StatsRefreshResponse,
)

__all__ = [
    # Common
    "BaseSchema",
    "PaginationParams",
    "PaginationMeta",
    "PaginatedResponse",
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "ReadinessResponse",
    # User
    "UserCreate",
    "UserLogin",
    "UserUpdate",
    "AdminUserUpdate",
    "UserPublicResponse",
    "UserResponse",
    "AuthResponse",
    "NotificationSettingsResponse",
    "NotificationSettingsUpdate",
    # Category
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryDetailResponse",
    # Content
    "ContentCreate",
    "ContentUpdate",
    "ContentStatusUpdate",
    "ContentResponse",
    "TrendingContentResponse",
    "SearchResultResponse",
    "SearchResponse",
    # Comment
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    "CommentThreadResponse",
    # Rating
    "RatingCreate",
    "RatingResponse",
    "RatingStatsResponse",
    "BulkStatsRequest",
    "BulkStatsResponse",
    "ToggleLikeResponse",
    "UserRatingStatusResponse",
    "TopContentResponse",
    # Follow
    "FollowCreate",
    "FollowResponse",
    "FollowStatsResponse",
    # Bookmark & stats
    "BookmarkCreate",
    "BookmarkResponse",
    "BookmarkStatusResponse",
    "LikeStatRow",
    "FollowStatRow",
    "StatsRefreshResponse",
]
