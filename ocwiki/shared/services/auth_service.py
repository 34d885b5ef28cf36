"""
Authentication Service

Business logic for the admin login flow.

Service Pattern:
================
Services encapsulate business logic and coordinate between:
- Stores (session records, rate-limit state)
- Security utilities
- Configuration

Usage:
======
    from ocwiki.shared.services.auth_service import AuthService

    service = AuthService(session_store, rate_limiter)
    result = await service.login(username, password, client_id)
    identity = await service.authenticate(result.token)
"""

from dataclasses import dataclass
from typing import Optional

from ocwiki.config.settings import Settings, settings as default_settings
from ocwiki.shared.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    RateLimitError,
)
from ocwiki.shared.core.logging import get_logger
from ocwiki.shared.services.rate_limiter import LoginRateLimiter
from ocwiki.shared.services.session_store import SessionStore
from ocwiki.shared.utils.security import SecurityUtils

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"
AUTHENTICATION_REQUIRED = "Authentication required"


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login."""

    token: str
    expires_in: int  # seconds


@dataclass(frozen=True)
class AdminIdentity:
    """The authenticated admin."""

    id: str
    username: str


class AuthService:
    """
    Service for authentication-related business logic.

    Handles:
    - Admin login with rate limiting
    - Session issue and revocation
    - Session-cookie authentication

    Attributes:
        session_store: Where issued sessions are recorded
        rate_limiter: Failed-login throttle
        settings: Credentials and session lifetime
    """

    def __init__(
        self,
        session_store: SessionStore,
        rate_limiter: LoginRateLimiter,
        settings: Optional[Settings] = None,
    ) -> None:
        self.session_store = session_store
        self.rate_limiter = rate_limiter
        self.settings = settings or default_settings

    async def login(
        self,
        username: str,
        password: str,
        client_id: str,
    ) -> LoginResult:
        """
        Check admin credentials and open a session.

        Args:
            username: Submitted username
            password: Submitted plain text password
            client_id: Client address used for rate limiting

        Returns:
            LoginResult with the raw session token for the cookie

        Raises:
            RateLimitError: Client is locked out
            ConfigurationError: No admin credentials configured
            AuthenticationError: Wrong username or password
            PasswordHashError: Configured password hash is unusable
        """
        status = self.rate_limiter.check(client_id)
        if not status.allowed:
            logger.warning("Login blocked by rate limit", client_id=client_id)
            raise RateLimitError(retry_after=status.retry_after)

        if not self.settings.admin_configured:
            logger.error("Admin credentials are not configured")
            raise ConfigurationError()

        username_match = SecurityUtils.constant_time_compare(
            username.strip(), self.settings.ADMIN_USERNAME.strip()
        )
        password_match = await self._check_password(password.strip())

        if not (username_match and password_match):
            self.rate_limiter.record_failure(client_id)
            logger.warning("Failed login attempt", client_id=client_id)
            raise AuthenticationError(INVALID_CREDENTIALS)

        self.rate_limiter.clear(client_id)

        token = SecurityUtils.generate_session_token()
        await self.session_store.create_session(token)

        logger.info("Login successful", client_id=client_id)
        return LoginResult(
            token=token,
            expires_in=self.settings.SESSION_DURATION_SECONDS,
        )

    async def logout(self, token: Optional[str]) -> None:
        """Revoke the session behind a token, if any."""
        if token:
            await self.session_store.delete_session(token)

    async def authenticate(self, token: Optional[str]) -> AdminIdentity:
        """
        Resolve a session cookie to the admin identity.

        Raises:
            AuthenticationError: Token missing, unknown or expired
        """
        if not token:
            raise AuthenticationError(AUTHENTICATION_REQUIRED)

        session = await self.session_store.get_session(token)
        if session is None:
            raise AuthenticationError(AUTHENTICATION_REQUIRED)

        return AdminIdentity(
            id="admin",
            username=self.settings.ADMIN_USERNAME.strip() or "admin",
        )

    async def _check_password(self, password: str) -> bool:
        password_hash = self.settings.ADMIN_PASSWORD_HASH.strip()
        if password_hash:
            return await SecurityUtils.verify_password(password, password_hash)
        return SecurityUtils.constant_time_compare(
            password, self.settings.ADMIN_PASSWORD.strip()
        )
