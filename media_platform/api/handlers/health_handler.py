"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from media_platform.config.settings import settings
from media_platform.db import check_db
from media_platform.schemas.common import HealthResponse, ReadinessResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Liveness check. Never touches the database.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower().replace(" ", "_"),
        version=settings.APP_VERSION,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check():
    """
    Readiness check: runs `SELECT 1` against the database.

    Returns:
        200 {"status": "ready"} or 503 {"status": "not_ready"}
    """
    if await check_db():
        return ReadinessResponse(status="ready", database="ok")

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=ReadinessResponse(status="not_ready", database="unavailable").model_dump(),
    )
