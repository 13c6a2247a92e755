"""
API Middleware

Custom middleware for the FastAPI application.

Components:
===========
- error_handler: Global exception handling (error envelope)
- request_logging: Request id binding and per-request log line

Usage:
======
    from media_platform.api.middleware import setup_exception_handlers, setup_request_logging

    app = FastAPI()
    setup_exception_handlers(app)
    setup_request_logging(app)
"""

from media_platform.api.middleware.error_handler import setup_exception_handlers
from media_platform.api.middleware.request_logging import setup_request_logging

__all__ = [
    "setup_exception_handlers",
    "setup_request_logging",
]
