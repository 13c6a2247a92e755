"""
Repository Pattern Implementations

Repositories encapsulate database queries and give services a clean API
for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]        ← Generic CRUD + constraint translation
         │
         ├── UserRepository          ← Lookups by email/username, settings row
         ├── CategoryRepository      ← Tree queries
         ├── ContentRepository       ← Listings, trending, feed, search
         ├── CommentRepository       ← Roots and replies
         ├── RatingRepository        ← Likes and like counts
         ├── FollowRepository        ← Follow graph
         └── BookmarkRepository      ← Private saves

    StatsRepository                  ← Materialized views (raw SQL)

Usage Example:
==============
    from media_platform.repositories import ContentRepository

    repo = ContentRepository(db)
    items, total = await repo.list_published(offset=0, limit=20)
"""

from media_platform.repositories.base import BaseRepository
from media_platform.repositories.user_repository import UserRepository
from media_platform.repositories.category_repository import CategoryRepository
from media_platform.repositories.content_repository import ContentRepository
from media_platform.repositories.comment_repository import CommentRepository
from media_platform.repositories.rating_repository import RatingRepository
from media_platform.repositories.follow_repository import FollowRepository
from media_platform.repositories.bookmark_repository import BookmarkRepository
from media_platform.repositories.stats_repository import StatsRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "CategoryRepository",
    "ContentRepository",
    "CommentRepository",
    "RatingRepository",
    "FollowRepository",
    "BookmarkRepository",
    "StatsRepository",
]
