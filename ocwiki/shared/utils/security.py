"""
Security Utilities

Session token handling, constant-time comparison and password hashing.

Session Tokens:
===============
Tokens carry 256 bits from the OS CSPRNG (``secrets``) encoded as
URL-safe base64 without padding, so they can be used as a cookie value
as-is. Only the SHA-256 digest of a token is ever stored.

Password Hashing:
=================
Uses passlib's bcrypt handler with a per-call random salt. Hashing and
verification are CPU-bound and run in the threadpool so the event loop
keeps serving other requests.

Usage:
======
    from ocwiki.shared.utils.security import SecurityUtils

    token = SecurityUtils.generate_session_token()
    token_hash = SecurityUtils.hash_session_token(token)
    assert SecurityUtils.verify_session_token(token, token_hash)

    hashed = await SecurityUtils.hash_password("password123")
    if await SecurityUtils.verify_password("password123", hashed):
        print("Password matches!")
"""

import hashlib
import hmac
import secrets

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext
from passlib.exc import MissingBackendError, PasswordSizeError

from ocwiki.config.settings import settings
from ocwiki.shared.core.exceptions import PasswordHashError
from ocwiki.shared.core.logging import get_logger


logger = get_logger(__name__)

# 32 bytes = 256 bits of entropy
SESSION_TOKEN_BYTES = 32

# Password hashing configuration
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class SecurityUtils:
    """
    Security utilities for authentication.

    Provides:
    - Constant-time string comparison
    - Session token generation, hashing and verification
    - Password hashing with bcrypt
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # COMPARISON
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def constant_time_compare(a: str, b: str) -> bool:
        """
        Compare two strings without leaking where they first differ.

        A length mismatch returns early since length is not secret.
        Equal-length inputs are compared byte-wise over their full UTF-8
        encoding with ``hmac.compare_digest``.

        Any failure while comparing (non-string input, text that cannot be
        encoded) counts as "not equal"; this never raises.

        Args:
            a: First value
            b: Second value

        Returns:
            True only if both strings are identical
        """
        try:
            if len(a) != len(b):
                return False
            return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
        except (TypeError, ValueError) as e:
            logger.debug("Constant-time compare failed", error_type=type(e).__name__)
            return False

    # ═══════════════════════════════════════════════════════════════════════════
    # SESSION TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def generate_session_token() -> str:
        """
        Generate a new opaque session token.

        Returns:
            43-character URL-safe string (256 bits of entropy, no padding)
        """
        return secrets.token_urlsafe(SESSION_TOKEN_BYTES)

    @staticmethod
    def hash_session_token(token: str) -> str:
        """
        One-way digest of a session token for storage.

        Args:
            token: Raw session token

        Returns:
            Hex-encoded SHA-256 digest (64 characters)
        """
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    @staticmethod
    def verify_session_token(token: str, token_hash: str) -> bool:
        """
        Check a raw token against a stored digest.

        Args:
            token: Raw session token presented by the client
            token_hash: Digest previously returned by hash_session_token()

        Returns:
            True if the token produces the stored digest
        """
        try:
            candidate = SecurityUtils.hash_session_token(token)
        except (AttributeError, UnicodeEncodeError):
            return False
        return SecurityUtils.constant_time_compare(candidate, token_hash)

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD HASHING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    async def hash_password(password: str) -> str:
        """
        Hash password using bcrypt.

        Every call generates a fresh salt, so hashing the same password
        twice yields two different strings.

        Args:
            password: Plain text password

        Returns:
            Bcrypt hash string (includes salt and cost factor)

        Raises:
            PasswordHashError: If the hashing backend fails
        """
        try:
            return await run_in_threadpool(pwd_context.hash, password)
        except (ValueError, TypeError, MissingBackendError) as e:
            logger.error("Password hashing failed", error_type=type(e).__name__)
            raise PasswordHashError("Password could not be hashed") from e

    @staticmethod
    async def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify password against bcrypt hash.

        Uses passlib's own constant-time check rather than re-hashing and
        comparing digests here.

        Args:
            plain_password: Plain text password to verify
            hashed_password: Bcrypt hash to verify against

        Returns:
            True if password matches, False otherwise
            (a password over passlib's size limit never matches)

        Raises:
            PasswordHashError: If the stored hash is malformed or the
                backend is unavailable. Never reported as a mismatch.
        """
        try:
            return await run_in_threadpool(
                pwd_context.verify, plain_password, hashed_password
            )
        except PasswordSizeError:
            return False
        except (ValueError, TypeError, MissingBackendError) as e:
            logger.error("Password verification failed", error_type=type(e).__name__)
            raise PasswordHashError("Password hash could not be verified") from e
