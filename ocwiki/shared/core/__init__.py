"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from ocwiki.shared.core.logging import logger, get_logger
    from ocwiki.shared.core.exceptions import WikiException, AuthenticationError

    logger.info("Session created")
"""

from ocwiki.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from ocwiki.shared.core.exceptions import (
    WikiException,
    AuthenticationError,
    RateLimitError,
    ConfigurationError,
    PasswordHashError,
    ServiceUnavailableError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "WikiException",
    "AuthenticationError",
    "RateLimitError",
    "ConfigurationError",
    "PasswordHashError",
    "ServiceUnavailableError",
]
