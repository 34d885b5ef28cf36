"""
Session Store

Server-side records of admin sessions.

Only the SHA-256 digest of a session token is persisted; the raw token
lives solely in the client's cookie. A leaked store therefore cannot be
replayed as a cookie.

Backends:
=========
- InMemorySessionStore: process-local dict, lost on restart
- RedisSessionStore: survives restarts, expiry handled by Redis TTL

Usage:
======
    from ocwiki.shared.services.session_store import get_session_store

    store = get_session_store()
    await store.create_session(token)
    session = await store.get_session(token)   # None if unknown/expired
"""

import functools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from fastapi.concurrency import run_in_threadpool
from redis.exceptions import RedisError

from ocwiki.config.settings import settings
from ocwiki.shared.adapters.redis_adapter import RedisAdapter, get_redis_adapter
from ocwiki.shared.core.exceptions import ServiceUnavailableError
from ocwiki.shared.core.logging import get_logger
from ocwiki.shared.utils.security import SecurityUtils

logger = get_logger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionData:
    """A stored admin session."""

    token_hash: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token_hash": self.token_hash,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionData":
        return cls(
            token_hash=data["token_hash"],
            created_at=datetime.fromisoformat(data["created_at"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
        )


class SessionStore(ABC):
    """
    Base class for session backends.

    Subclasses implement the raw record operations keyed by token hash;
    hashing, expiry and verification live here.
    """

    def __init__(
        self,
        duration_seconds: Optional[int] = None,
        clock: Clock = utc_now,
    ) -> None:
        if duration_seconds is None:
            duration_seconds = settings.SESSION_DURATION_SECONDS
        self.duration = timedelta(seconds=duration_seconds)
        self.clock = clock

    # ═══════════════════════════════════════════════════════════════════════════
    # BACKEND HOOKS
    # ═══════════════════════════════════════════════════════════════════════════

    @abstractmethod
    async def _save(self, session: SessionData) -> None:
        ...

    @abstractmethod
    async def _load(self, token_hash: str) -> Optional[SessionData]:
        ...

    @abstractmethod
    async def _remove(self, token_hash: str) -> None:
        ...

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Remove expired sessions. Returns how many were removed."""

    # ═══════════════════════════════════════════════════════════════════════════
    # PUBLIC API
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_session(self, token: str) -> SessionData:
        """
        Register a freshly issued token.

        Args:
            token: Raw session token (not stored)

        Returns:
            The stored session record
        """
        now = self.clock()
        session = SessionData(
            token_hash=SecurityUtils.hash_session_token(token),
            created_at=now,
            expires_at=now + self.duration,
        )
        await self._save(session)
        logger.info("Session created", expires_at=session.expires_at.isoformat())
        return session

    async def get_session(self, token: str) -> Optional[SessionData]:
        """
        Look up the session for a raw token.

        Expired sessions are deleted on the way out.

        Returns:
            SessionData, or None if unknown or expired
        """
        token_hash = SecurityUtils.hash_session_token(token)
        session = await self._load(token_hash)
        if session is None:
            return None

        if session.is_expired(self.clock()):
            await self._remove(token_hash)
            return None

        if not SecurityUtils.verify_session_token(token, session.token_hash):
            return None
        return session

    async def delete_session(self, token: str) -> None:
        """Forget a session. Unknown tokens are ignored."""
        await self._remove(SecurityUtils.hash_session_token(token))


class InMemorySessionStore(SessionStore):
    """Sessions held in a dict; every worker process has its own."""

    def __init__(
        self,
        duration_seconds: Optional[int] = None,
        clock: Clock = utc_now,
    ) -> None:
        super().__init__(duration_seconds, clock)
        self._sessions: Dict[str, SessionData] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    async def _save(self, session: SessionData) -> None:
        self._sessions[session.token_hash] = session

    async def _load(self, token_hash: str) -> Optional[SessionData]:
        return self._sessions.get(token_hash)

    async def _remove(self, token_hash: str) -> None:
        self._sessions.pop(token_hash, None)

    async def cleanup_expired(self) -> int:
        now = self.clock()
        expired = [key for key, s in self._sessions.items() if s.is_expired(now)]
        for key in expired:
            del self._sessions[key]
        return len(expired)


class RedisSessionStore(SessionStore):
    """
    Sessions stored as JSON under ``session:<token hash>`` with a TTL.

    The adapter's client is blocking, so every call goes through the
    threadpool. An unreachable Redis surfaces as ServiceUnavailableError
    on reads and writes alike.
    """

    KEY_PREFIX = "session:"

    def __init__(
        self,
        adapter: RedisAdapter,
        duration_seconds: Optional[int] = None,
        clock: Clock = utc_now,
    ) -> None:
        super().__init__(duration_seconds, clock)
        self.adapter = adapter

    def _key(self, token_hash: str) -> str:
        return f"{self.KEY_PREFIX}{token_hash}"

    async def _save(self, session: SessionData) -> None:
        ttl = int(self.duration.total_seconds())
        saved = await run_in_threadpool(
            self.adapter.set_json,
            self._key(session.token_hash),
            session.to_dict(),
            ttl,
        )
        if not saved:
            raise ServiceUnavailableError("Session storage unavailable")

    async def _load(self, token_hash: str) -> Optional[SessionData]:
        try:
            data = await run_in_threadpool(self.adapter.get_json, self._key(token_hash))
        except RedisError as e:
            raise ServiceUnavailableError("Session storage unavailable") from e

        if data is None:
            return None
        try:
            return SessionData.from_dict(data)
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed session record")
            return None

    async def _remove(self, token_hash: str) -> None:
        await run_in_threadpool(self.adapter.delete, self._key(token_hash))

    async def cleanup_expired(self) -> int:
        # Redis drops keys when their TTL runs out
        return 0


@functools.lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """Get or create the configured session store singleton."""
    if settings.SESSION_BACKEND == "redis":
        return RedisSessionStore(get_redis_adapter())
    return InMemorySessionStore()
