"""
SQLAlchemy Models

Model Hierarchy:
================
    User
       ├── contents (Content[])          ── author_id
       ├── comments / ratings / bookmarks ── user_id
       ├── follows (Follow[])            ── follower_id / following_id
       └── notification_settings         ── seeded by trigger

    Category
       └── children (Category[])         ── parent_id

    Content
       ├── comments (Comment[])          ── threaded via parent_id
       ├── ratings (Rating[])
       └── bookmarks (Bookmark[])

Usage:
======
    from media_platform.models import Content, ContentStatus

    content.set_status(ContentStatus.PUBLISHED.value)
"""

from media_platform.models.base import Base, TimestampMixin
from media_platform.models.enums import ContentStatus, ContentType, UserRole
from media_platform.models.user import User
from media_platform.models.category import Category
from media_platform.models.content import Content
from media_platform.models.comment import Comment
from media_platform.models.rating import Rating, LIKE_VALUE
from media_platform.models.follow import Follow
from media_platform.models.bookmark import Bookmark
from media_platform.models.notification_settings import FollowNotificationSettings

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    # Enums
    "ContentStatus",
    "ContentType",
    "UserRole",
    # Models
    "User",
    "Category",
    "Content",
    "Comment",
    "Rating",
    "LIKE_VALUE",
    "Follow",
    "Bookmark",
    "FollowNotificationSettings",
]
