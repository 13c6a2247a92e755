"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: CurrentUser, AdminUser, OptionalUser
- Pagination: Pagination (limit/offset)
- Services: get_*_service() functions

Usage:
======
    from media_platform.api.dependencies import CurrentUser, Pagination

    @router.get("/bookmarks")
    async def list_bookmarks(user: CurrentUser, page: Pagination):
        ...
"""

from media_platform.api.dependencies.database import (
    get_db,
    DbSession,
)
from media_platform.api.dependencies.auth import (
    get_current_user,
    get_current_user_token,
    get_optional_user,
    require_admin,
    CurrentUser,
    AdminUser,
    OptionalUser,
)
from media_platform.api.dependencies.pagination import get_pagination, Pagination

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_current_user",
    "get_current_user_token",
    "get_optional_user",
    "require_admin",
    "CurrentUser",
    "AdminUser",
    "OptionalUser",
    # Pagination
    "get_pagination",
    "Pagination",
]
