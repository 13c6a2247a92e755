"""
API Handlers

Route handlers for the media platform API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer; service exceptions
reach the client through the global exception handlers.
"""

from media_platform.api.handlers import (
    admin_handler,
    bookmark_handler,
    category_handler,
    comment_handler,
    content_handler,
    follow_handler,
    health_handler,
    rating_handler,
    user_handler,
)

__all__ = [
    "admin_handler",
    "bookmark_handler",
    "category_handler",
    "comment_handler",
    "content_handler",
    "follow_handler",
    "health_handler",
    "rating_handler",
    "user_handler",
]
