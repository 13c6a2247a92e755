"""
Core Module

Structured logging and the application exception hierarchy.

Usage:
======
    from media_platform.core import logger, NotFoundError

    logger.info("Category created", category_id=category.id)
"""

from media_platform.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from media_platform.core.exceptions import (
    MediaPlatformException,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    UserNotFoundError,
    CategoryNotFoundError,
    ContentNotFoundError,
    CommentNotFoundError,
    RatingNotFoundError,
    FollowNotFoundError,
    BookmarkNotFoundError,
    ValidationError,
    ConflictError,
    DuplicateResourceError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "MediaPlatformException",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "UserNotFoundError",
    "CategoryNotFoundError",
    "ContentNotFoundError",
    "CommentNotFoundError",
    "RatingNotFoundError",
    "FollowNotFoundError",
    "BookmarkNotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateResourceError",
]
