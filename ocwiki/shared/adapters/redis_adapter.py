"""
Redis adapter - Session record storage.

Provides:
- JSON values with TTL
- Key deletion
- Connectivity check for readiness probes

Reads raise RedisError so an outage is not mistaken for a missing key.
Writes and deletes log errors and report them through return values;
callers decide whether a failed write is fatal.

The client is synchronous. Call it from async code through
``run_in_threadpool``.
"""

import functools
import json
from typing import Any, Dict, Optional

import redis
from redis.exceptions import RedisError

from ocwiki.config.settings import settings
from ocwiki.shared.core.logging import get_logger

logger = get_logger(__name__)


class RedisAdapter:
    """
    Adapter for Redis operations.

    Attributes:
        url: Redis URL (redis://host:port/db)
    """

    def __init__(
        self,
        url: Optional[str] = None,
        client: Optional[redis.Redis] = None,
    ):
        """
        Initialize Redis adapter.

        Args:
            url: Redis URL, defaults to settings.REDIS_URL
            client: Pre-built client, skips lazy connection setup
        """
        self.url = url or settings.REDIS_URL
        self._client = client

    @property
    def client(self) -> redis.Redis:
        """Lazy-loaded Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
                socket_timeout=settings.REDIS_SOCKET_TIMEOUT_SECONDS,
                socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT_SECONDS,
            )
        return self._client

    def get_json(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Get a JSON value.

        Returns:
            Parsed JSON or None if missing or unreadable

        Raises:
            RedisError: If Redis could not be reached
        """
        try:
            value = self.client.get(key)
        except RedisError as e:
            logger.warning("Redis get failed", key=key, error=str(e))
            raise

        if not value:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable Redis value", key=key)
            return None

    def set_json(
        self,
        key: str,
        value: Dict[str, Any],
        ttl: Optional[int] = None,
    ) -> bool:
        """
        Store a dict as JSON.

        Args:
            key: Key to write
            value: Dict to store
            ttl: Time-to-live in seconds

        Returns:
            True if successful
        """
        payload = json.dumps(value)
        try:
            if ttl:
                self.client.setex(key, ttl, payload)
            else:
                self.client.set(key, payload)
            return True
        except RedisError as e:
            logger.warning("Redis set failed", key=key, error=str(e))
            return False

    def delete(self, key: str) -> bool:
        """
        Delete a key.

        Returns:
            True if key was deleted
        """
        try:
            return bool(self.client.delete(key))
        except RedisError as e:
            logger.warning("Redis delete failed", key=key, error=str(e))
            return False

    def ping(self) -> bool:
        """
        Check Redis connectivity.

        Returns:
            True if connected
        """
        try:
            return bool(self.client.ping())
        except RedisError:
            return False


@functools.lru_cache(maxsize=1)
def get_redis_adapter() -> RedisAdapter:
    """Get or create Redis adapter singleton."""
    return RedisAdapter()
