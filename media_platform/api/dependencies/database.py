"""
Database Dependency

The per-request session dependency. Tests replace it through
`app.dependency_overrides[get_db]`.

Usage:
======
    from media_platform.api.dependencies.database import DbSession

    @router.get("/ready")
    async def ready(db: DbSession):
        ...
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session that commits on success and rolls back on exception.
    """
    async for session in _get_db():
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]
