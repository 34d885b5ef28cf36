# tests/test_redis_adapter.py
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from ocwiki.config.settings import settings
from ocwiki.shared.adapters.redis_adapter import RedisAdapter


class DownClient:
    """Redis client whose every command fails."""

    def get(self, key):
        raise RedisConnectionError("Connection refused")

    def setex(self, key, ttl, value):
        raise RedisConnectionError("Connection refused")

    def delete(self, key):
        raise RedisConnectionError("Connection refused")

    def ping(self):
        raise RedisConnectionError("Connection refused")


def test_client_has_socket_timeouts():
    adapter = RedisAdapter("redis://localhost:6379/0")
    kwargs = adapter.client.connection_pool.connection_kwargs

    assert kwargs["socket_timeout"] == settings.REDIS_SOCKET_TIMEOUT_SECONDS
    assert kwargs["socket_connect_timeout"] == settings.REDIS_SOCKET_TIMEOUT_SECONDS


def test_read_failure_propagates():
    adapter = RedisAdapter(client=DownClient())
    with pytest.raises(RedisConnectionError):
        adapter.get_json("session:abc")


def test_write_failures_are_reported_as_false():
    adapter = RedisAdapter(client=DownClient())

    assert adapter.set_json("session:abc", {"a": 1}, ttl=60) is False
    assert adapter.delete("session:abc") is False
    assert adapter.ping() is False
