"""
Service Dependencies

FastAPI dependencies for service injection.

The session store and rate limiter are process-wide singletons; the
AuthService wrapping them is cheap and created per request. Tests swap
any of these through ``app.dependency_overrides``.

Usage:
======
    from ocwiki.api.dependencies.services import get_auth_service

    @router.post("/login")
    async def login(
        data: LoginRequest,
        auth_service: AuthService = Depends(get_auth_service)
    ):
        ...
"""

from fastapi import Depends

from ocwiki.shared.services.auth_service import AuthService
from ocwiki.shared.services.rate_limiter import (
    LoginRateLimiter,
    get_login_rate_limiter,
)
from ocwiki.shared.services.session_store import SessionStore, get_session_store


async def get_store() -> SessionStore:
    """Dependency to get the configured SessionStore."""
    return get_session_store()


async def get_rate_limiter() -> LoginRateLimiter:
    """Dependency to get the login rate limiter."""
    return get_login_rate_limiter()


async def get_auth_service(
    session_store: SessionStore = Depends(get_store),
    rate_limiter: LoginRateLimiter = Depends(get_rate_limiter),
) -> AuthService:
    """
    Dependency to get AuthService instance.
    """
    return AuthService(session_store, rate_limiter)
