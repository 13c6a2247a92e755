"""
Request Logging Middleware

Binds a request id into the structlog context for the lifetime of each
request and logs one line per completed request.

    {"event": "Request completed", "request_id": "...", "method": "GET",
     "path": "/api/contents", "status_code": 200, "duration_ms": 12.4}

The id is taken from an incoming X-Request-ID header when present and is
echoed back on the response.
"""

import time
import uuid

from fastapi import FastAPI, Request

from media_platform.core.logging import clear_log_context, log_context, logger


REQUEST_ID_HEADER = "X-Request-ID"


def setup_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        clear_log_context()
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        log_context(request_id=request_id)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
