"""
Media Platform

Backend for a media publishing platform: users, categories, content items,
threaded comments, likes, follows, bookmarks, full-text search and trending.

Package Structure:
==================
    media_platform/
    ├── api/            ← FastAPI app, handlers, dependencies, middleware
    ├── config/         ← Settings from environment variables
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── utils/          ← Password hashing, JWT, trending score
    └── migrations/     ← Alembic migrations (tables, search, views)

Usage:
======
    from media_platform.models import User, Content
    from media_platform.repositories import ContentRepository
    from media_platform.services import ContentService
    from media_platform.schemas import ContentCreate, ContentResponse
    from media_platform.core import logger, MediaPlatformException
"""

__version__ = "1.0.0"
