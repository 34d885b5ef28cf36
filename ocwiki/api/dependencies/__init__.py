"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Authentication: get_current_admin(), CurrentAdmin, ClientId, SessionToken
- Services: get_auth_service(), get_store(), get_rate_limiter()

Usage:
======
    from ocwiki.api.dependencies import CurrentAdmin

    @router.get("/session")
    async def current_session(admin: CurrentAdmin):
        return admin
"""

from ocwiki.api.dependencies.auth import (
    get_client_id,
    get_session_token,
    get_current_admin,
    ClientId,
    SessionToken,
    CurrentAdmin,
)
from ocwiki.api.dependencies.services import (
    get_auth_service,
    get_store,
    get_rate_limiter,
)

__all__ = [
    # Authentication
    "get_client_id",
    "get_session_token",
    "get_current_admin",
    "ClientId",
    "SessionToken",
    "CurrentAdmin",
    # Services
    "get_auth_service",
    "get_store",
    "get_rate_limiter",
]
