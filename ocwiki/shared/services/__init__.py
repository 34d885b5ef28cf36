"""
Services Package

Business logic layer.

Contents:
=========
- auth_service: Admin login, logout and session authentication
- session_store: Hashed session records (memory or Redis)
- rate_limiter: Failed-login throttling

Usage:
======
    from ocwiki.shared.services import AuthService, get_session_store
"""

from ocwiki.shared.services.auth_service import (
    AuthService,
    AdminIdentity,
    LoginResult,
)
from ocwiki.shared.services.rate_limiter import (
    LoginRateLimiter,
    RateLimitStatus,
    get_login_rate_limiter,
)
from ocwiki.shared.services.session_store import (
    SessionData,
    SessionStore,
    InMemorySessionStore,
    RedisSessionStore,
    get_session_store,
)

__all__ = [
    "AuthService",
    "AdminIdentity",
    "LoginResult",
    "LoginRateLimiter",
    "RateLimitStatus",
    "get_login_rate_limiter",
    "SessionData",
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
    "get_session_store",
]
