"""
OC Wiki API Application Entry Point

FastAPI application setup with routers, middleware, and lifecycle management.

Lifecycle:
==========
1. Application starts → lifespan startup
2. Background task starts purging expired sessions and stale
   rate-limit entries every SESSION_CLEANUP_INTERVAL_SECONDS
3. Application serves requests
4. Application stops → purge task cancelled

Usage:
======
    # Run with uvicorn
    uvicorn ocwiki.api.main:app --host 0.0.0.0 --port 8000 --reload

    # Or programmatically
    from ocwiki.api.main import create_application
    app = create_application()
"""

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ocwiki.api.middleware import setup_exception_handlers, setup_request_context
from ocwiki.api.routes import register_routes
from ocwiki.config.settings import settings
from ocwiki.shared.core.logging import logger
from ocwiki.shared.services.rate_limiter import LoginRateLimiter, get_login_rate_limiter
from ocwiki.shared.services.session_store import SessionStore, get_session_store


async def purge_expired_state(
    store: SessionStore,
    rate_limiter: LoginRateLimiter,
) -> tuple[int, int]:
    """
    Drop expired sessions and stale rate-limit entries once.

    Returns:
        Tuple of (sessions removed, rate-limit entries removed)
    """
    removed = await store.cleanup_expired()
    released = rate_limiter.cleanup()
    if removed or released:
        logger.info(
            "Purged expired auth state",
            sessions=removed,
            rate_limit_entries=released,
        )
    return removed, released


async def purge_periodically(interval_seconds: int) -> None:
    """Run purge_expired_state() every interval until cancelled."""
    store = get_session_store()
    rate_limiter = get_login_rate_limiter()

    while True:
        await asyncio.sleep(interval_seconds)
        await purge_expired_state(store, rate_limiter)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
    - Start the session purge task

    Shutdown:
    - Cancel the purge task
    """
    logger.info(
        "Starting OC Wiki API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
        session_backend=settings.SESSION_BACKEND,
    )

    if not settings.admin_configured:
        logger.warning("Admin credentials are not configured; logins will fail")

    purge_task = asyncio.create_task(
        purge_periodically(settings.SESSION_CLEANUP_INTERVAL_SECONDS)
    )

    yield

    logger.info("Shutting down OC Wiki API")
    purge_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await purge_task
    logger.info("OC Wiki API shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Admin authentication for the OC Wiki",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_request_context(app)

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
