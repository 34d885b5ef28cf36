"""
Authentication Dependencies

FastAPI dependencies for admin session authentication.

Dependency Hierarchy:
=====================
    get_session_token()    ← Read the session cookie
           │
           ▼
    get_current_admin()    ← Resolve it through AuthService

Type Aliases:
=============
    ClientId      - Caller address used for rate limiting
    SessionToken  - Raw session cookie value (may be None)
    CurrentAdmin  - Authenticated admin identity

Usage:
======
    from ocwiki.api.dependencies.auth import CurrentAdmin

    @router.get("/session")
    async def current_session(admin: CurrentAdmin):
        return {"username": admin.username}
"""

from typing import Annotated, Optional

from fastapi import Depends, Request

from ocwiki.api.dependencies.services import get_auth_service
from ocwiki.config.settings import settings
from ocwiki.shared.services.auth_service import AdminIdentity, AuthService


def get_client_id(request: Request) -> str:
    """
    Identify the caller for rate limiting.

    Proxies put the original address first in X-Forwarded-For.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def get_session_token(request: Request) -> Optional[str]:
    """Raw session token from the admin cookie, if present."""
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None


async def get_current_admin(
    token: Annotated[Optional[str], Depends(get_session_token)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AdminIdentity:
    """
    Get the authenticated admin for this request.

    Raises:
        AuthenticationError: If the cookie is missing or the session is
            unknown or expired
    """
    return await auth_service.authenticate(token)


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

ClientId = Annotated[str, Depends(get_client_id)]
SessionToken = Annotated[Optional[str], Depends(get_session_token)]
CurrentAdmin = Annotated[AdminIdentity, Depends(get_current_admin)]
