"""
Logging Configuration

Structured logging setup using structlog.

Log Output:
===========
Development:
    2025-03-02 10:30:00 [info     ] Content published   content_id=42 author_id=7 request_id=9f1c...

Production (JSON):
    {"timestamp": "2025-03-02T10:30:00Z", "level": "info", "event": "Content published", "content_id": 42}

Usage:
======
    from media_platform.core.logging import logger, get_logger, log_context

    logger.info("Follow created", follower_id=1, following_id=2)

    search_logger = get_logger("search")
    search_logger.warning("search_contents failed, using ILIKE fallback", query=q)

    # Everything logged later in this request carries request_id
    log_context(request_id=request_id)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from media_platform.config.settings import settings


def setup_logging() -> None:
    """
    Configure structlog for the application.

    Development gets colored console output, every other environment
    gets one JSON object per line.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development:
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name shown in the `logger` field

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Bind key-value pairs to every log call made later in this context.

    Example:
        log_context(request_id="abc-123", user_id=7)
        logger.info("Rating toggled")  # includes request_id and user_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Drop all bound context variables (end of request)."""
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("media_platform")
