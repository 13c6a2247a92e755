"""
Database Module

Engine, per-request sessions and lifecycle hooks.

    FastAPI route
        │  Depends(get_db)
        ▼
    AsyncSession  ── one per request, commit on success, rollback on error
        │
        ▼
    Repositories  ── UserRepository, ContentRepository, FollowRepository, ...
        │
        ▼
    PostgreSQL

Usage:
======
    from media_platform.db import get_db

    @router.get("/{content_id}")
    async def get_content(content_id: int, db: AsyncSession = Depends(get_db)):
        ...
"""

from media_platform.db.session import (
    get_db,
    init_db,
    check_db,
    close_db,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "check_db",
    "close_db",
    "AsyncSessionLocal",
    "engine",
]
