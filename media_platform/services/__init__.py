"""
Business Logic Services

Services encapsulate business rules and coordinate repositories.

Service Pattern:
================
    Handler → Service → Repository → Database

Services should:
- Enforce ownership, uniqueness and lifecycle rules
- Raise MediaPlatformException subclasses, never HTTP errors
- Leave transactions to get_db() (repositories only flush)

Available Services:
===================
- AuthService: Registration, login, token issuance
- UserService: Profiles, admin user management, notification settings
- CategoryService: Category tree
- ContentService: Content CRUD, lifecycle, trending, search, feed
- CommentService: Threaded comments
- RatingService: Likes and like statistics
- FollowService: Follow graph
- BookmarkService: Private saves
- StatsService: Materialized statistics views
"""

from media_platform.services.auth_service import AuthService
from media_platform.services.user_service import UserService
from media_platform.services.category_service import CategoryService
from media_platform.services.content_service import ContentService
from media_platform.services.comment_service import CommentService
from media_platform.services.rating_service import RatingService
from media_platform.services.follow_service import FollowService
from media_platform.services.bookmark_service import BookmarkService
from media_platform.services.stats_service import StatsService

__all__ = [
    "AuthService",
    "UserService",
    "CategoryService",
    "ContentService",
    "CommentService",
    "RatingService",
    "FollowService",
    "BookmarkService",
    "StatsService",
]
