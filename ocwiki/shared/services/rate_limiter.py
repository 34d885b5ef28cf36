"""
Login Rate Limiter

In-memory throttling of failed admin logins per client.

Rules:
======
- Failed attempts are counted inside a fixed window (LOGIN_WINDOW_SECONDS)
- Once LOGIN_MAX_ATTEMPTS failures are reached, the next check starts a
  lockout (LOGIN_LOCKOUT_SECONDS) during which every check is denied
- A successful login clears the client's entry

State is per process and resets on restart. Running several workers
multiplies the effective limit by the worker count, even when sessions
are shared through Redis; a shared limit would need a Redis counter
(INCR plus EXPIRE per client) in place of the dict below.
"""

import functools
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ocwiki.config.settings import settings


@dataclass
class RateLimitEntry:
    attempts: int
    reset_at: float
    locked_until: Optional[float] = None

    def is_stale(self, now: float) -> bool:
        return self.reset_at < now and (
            self.locked_until is None or self.locked_until < now
        )


@dataclass(frozen=True)
class RateLimitStatus:
    allowed: bool
    retry_after: Optional[int] = None


class LoginRateLimiter:
    """
    Tracks failed login attempts keyed by client id.

    Attributes:
        max_attempts: Failures allowed inside one window
        window_seconds: Length of the counting window
        lockout_seconds: How long a client is blocked after too many failures
    """

    def __init__(
        self,
        max_attempts: Optional[int] = None,
        window_seconds: Optional[int] = None,
        lockout_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_attempts is None:
            max_attempts = settings.LOGIN_MAX_ATTEMPTS
        if window_seconds is None:
            window_seconds = settings.LOGIN_WINDOW_SECONDS
        if lockout_seconds is None:
            lockout_seconds = settings.LOGIN_LOCKOUT_SECONDS

        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.lockout_seconds = lockout_seconds
        self.clock = clock
        self._entries: Dict[str, RateLimitEntry] = {}

    def check(self, client_id: str) -> RateLimitStatus:
        """
        Decide whether a client may attempt a login now.

        Returns:
            RateLimitStatus; retry_after is in whole seconds when denied
        """
        now = self.clock()
        entry = self._entries.get(client_id)

        if entry is None:
            return RateLimitStatus(allowed=True)

        if entry.is_stale(now):
            del self._entries[client_id]
            return RateLimitStatus(allowed=True)

        if entry.locked_until is not None and entry.locked_until > now:
            return RateLimitStatus(
                allowed=False,
                retry_after=math.ceil(entry.locked_until - now),
            )

        if entry.reset_at > now and entry.attempts >= self.max_attempts:
            entry.locked_until = now + self.lockout_seconds
            return RateLimitStatus(allowed=False, retry_after=self.lockout_seconds)

        return RateLimitStatus(allowed=True)

    def record_failure(self, client_id: str) -> None:
        """Count a failed attempt, opening a new window if needed."""
        now = self.clock()
        entry = self._entries.get(client_id)

        if entry is not None and entry.reset_at > now:
            entry.attempts += 1
        else:
            self._entries[client_id] = RateLimitEntry(
                attempts=1,
                reset_at=now + self.window_seconds,
            )

    def clear(self, client_id: str) -> None:
        """Forget a client's history (after a successful login)."""
        self._entries.pop(client_id, None)

    def cleanup(self) -> int:
        """Drop entries whose window and lockout have both passed."""
        now = self.clock()
        stale = [key for key, entry in self._entries.items() if entry.is_stale(now)]
        for key in stale:
            del self._entries[key]
        return len(stale)


@functools.lru_cache(maxsize=1)
def get_login_rate_limiter() -> LoginRateLimiter:
    """Get or create the process-wide login rate limiter."""
    return LoginRateLimiter()
