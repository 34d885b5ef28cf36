"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ocwiki.config.settings import settings
from ocwiki.shared.adapters.redis_adapter import get_redis_adapter
from ocwiki.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
    )


@router.get("/ready")
async def readiness_check():
    """
    Readiness check for load balancers.

    With the Redis session backend the service is only ready once Redis
    answers a ping.
    """
    if settings.SESSION_BACKEND == "redis" and not await run_in_threadpool(
        get_redis_adapter().ping
    ):
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "session_backend": "redis"},
        )
    return {"status": "ready"}


@router.get("/live")
async def liveness_check():
    """
    Liveness check.

    Returns:
        Simple alive status
    """
    return {"status": "alive"}
