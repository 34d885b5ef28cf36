"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    WikiException (base)
       │
       ├── AuthenticationError (401)      ← Bad credentials, missing/expired session
       ├── RateLimitError (429)           ← Too many failed logins
       ├── ConfigurationError (500)       ← Admin credentials not configured
       ├── PasswordHashError (500)        ← Hash backend failure, malformed stored hash
       └── ServiceUnavailableError (503)  ← Session backend down

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and converted to JSON:
    {
        "error": {
            "code": "AUTHENTICATION_ERROR",
            "message": "Invalid username or password",
            "details": {}
        }
    }
"""

from typing import Any, Optional


class WikiException(Exception):
    """
    Base exception for all OC Wiki application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
        headers: Extra HTTP response headers
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        self.headers = headers or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION ERRORS (401, 429)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(WikiException):
    """
    Authentication failed error (401 Unauthorized).

    The message must stay generic: callers never learn which check failed.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class RateLimitError(WikiException):
    """
    Rate limit exceeded error (429 Too Many Requests).

    Includes a Retry-After header when retry_after is known.
    """

    def __init__(
        self,
        message: str = "Too many login attempts. Please try again later.",
        retry_after: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra_details = details or {}
        headers = {}
        if retry_after:
            extra_details["retry_after_seconds"] = retry_after
            headers["Retry-After"] = str(retry_after)
        self.retry_after = retry_after
        super().__init__(
            message=message,
            status_code=429,
            error_code="RATE_LIMIT_EXCEEDED",
            details=extra_details,
            headers=headers,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# SERVER-SIDE ERRORS (500, 503)
# ═══════════════════════════════════════════════════════════════════════════════


class ConfigurationError(WikiException):
    """Server is missing required configuration (500)."""

    def __init__(
        self,
        message: str = "Server configuration error",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="CONFIGURATION_ERROR",
            details=details,
        )


class PasswordHashError(WikiException):
    """
    Password hashing or verification could not be performed (500).

    Raised for a malformed stored hash or an unusable hashing backend.
    Distinct from a verification that simply returned False.
    """

    def __init__(
        self,
        message: str = "Password hash could not be processed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="PASSWORD_HASH_ERROR",
            details=details,
        )


class ServiceUnavailableError(WikiException):
    """
    Service temporarily unavailable error (503).

    Raised when the session backend (Redis) cannot be reached.
    """

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=503,
            error_code="SERVICE_UNAVAILABLE",
            details=details,
        )
