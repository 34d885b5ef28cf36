# tests/conftest.py
import os
import threading

# Settings are read at import time, so configure them before ocwiki loads.
os.environ["APP_ENV"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "correct-horse"
os.environ["ADMIN_PASSWORD_HASH"] = ""
os.environ["SESSION_BACKEND"] = "memory"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

from ocwiki.api.dependencies.services import get_rate_limiter, get_store
from ocwiki.api.main import create_application
from ocwiki.shared.services.rate_limiter import LoginRateLimiter
from ocwiki.shared.services.session_store import InMemorySessionStore


class FakeClock:
    """Manually advanced clock returning aware UTC datetimes."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeMonotonic:
    """Manually advanced float clock, like time.monotonic."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeRedisAdapter:
    """In-memory stand-in for RedisAdapter's JSON/TTL operations."""

    def __init__(self):
        self.data = {}
        self.ttls = {}
        self.fail_writes = False
        self.fail_reads = False
        self.threads = set()

    def get_json(self, key):
        self.threads.add(threading.get_ident())
        if self.fail_reads:
            raise RedisConnectionError("Connection refused")
        return self.data.get(key)

    def set_json(self, key, value, ttl=None):
        self.threads.add(threading.get_ident())
        if self.fail_writes:
            return False
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, key):
        self.threads.add(threading.get_ident())
        self.ttls.pop(key, None)
        return self.data.pop(key, None) is not None

    def ping(self):
        return True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def monotonic():
    return FakeMonotonic()


@pytest.fixture
def fake_redis():
    return FakeRedisAdapter()


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def rate_limiter():
    return LoginRateLimiter()


@pytest.fixture
def client(session_store, rate_limiter):
    app = create_application()
    app.dependency_overrides[get_store] = lambda: session_store
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    return TestClient(app)
