"""
Media Platform API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
    Middleware:    CORS → request logging (request_id) → exception handlers
    Routers:       health, users, categories, contents, comments, ratings,
                   follows, bookmarks, admin
    Dependencies:  database session, JWT auth, pagination, services

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database connectivity verified
3. Application serves requests
4. Application stops → lifespan shutdown
5. Database connections closed

Usage:
======
    # Run with uvicorn
    uvicorn media_platform.api.main:app --host 0.0.0.0 --port 8080 --reload

    # Or programmatically
    from media_platform.api.main import create_application
    app = create_application()
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from media_platform.api.middleware import setup_exception_handlers, setup_request_logging
from media_platform.api.routes import register_routes
from media_platform.config.settings import settings
from media_platform.core.logging import logger
from media_platform.db import close_db, init_db


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
    - Verify the database is reachable

    Shutdown:
    - Dispose of the connection pool
    """
    logger.info(
        "Starting Media Platform API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    await init_db()
    logger.info("Media Platform API started successfully")

    yield

    logger.info("Shutting down Media Platform API")
    await close_db()
    logger.info("Media Platform API shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Media publishing platform: content, comments, likes, follows and bookmarks",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    setup_request_logging(app)

    # CORS is added last so it wraps everything else
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    return app


# Create the application instance
app = create_application()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "media_platform.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
