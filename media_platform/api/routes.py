"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready     → Health check endpoints
    /api/users          → Registration, login, profiles, admin user management
    /api/categories     → Category tree
    /api/contents       → Content CRUD, trending, search, nested comments/ratings
    /api/comments       → Threaded comments
    /api/ratings        → Likes
    /api/follows        → Follow graph and feed
    /api/bookmarks      → Private bookmarks
    /api/admin          → Statistics views

Usage:
======
    from media_platform.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

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


API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    app.include_router(
        user_handler.router,
        prefix=f"{API_PREFIX}/users",
        tags=["Users"],
    )

    app.include_router(
        category_handler.router,
        prefix=f"{API_PREFIX}/categories",
        tags=["Categories"],
    )

    app.include_router(
        content_handler.router,
        prefix=f"{API_PREFIX}/contents",
        tags=["Contents"],
    )

    app.include_router(
        comment_handler.router,
        prefix=f"{API_PREFIX}/comments",
        tags=["Comments"],
    )

    app.include_router(
        rating_handler.router,
        prefix=f"{API_PREFIX}/ratings",
        tags=["Ratings"],
    )

    app.include_router(
        follow_handler.router,
        prefix=f"{API_PREFIX}/follows",
        tags=["Follows"],
    )

    app.include_router(
        bookmark_handler.router,
        prefix=f"{API_PREFIX}/bookmarks",
        tags=["Bookmarks"],
    )

    app.include_router(
        admin_handler.router,
        prefix=f"{API_PREFIX}/admin",
        tags=["Admin"],
    )
