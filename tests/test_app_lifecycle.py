# tests/test_app_lifecycle.py
import asyncio

from fastapi.testclient import TestClient

from ocwiki.api.main import create_application, purge_expired_state
from ocwiki.shared.services.rate_limiter import LoginRateLimiter
from ocwiki.shared.services.session_store import InMemorySessionStore


def test_purge_expired_state(clock, monotonic):
    store = InMemorySessionStore(duration_seconds=60, clock=clock)
    asyncio.run(store.create_session("expiring"))
    clock.advance(seconds=30)
    asyncio.run(store.create_session("fresh"))
    clock.advance(seconds=31)

    limiter = LoginRateLimiter(
        max_attempts=5, window_seconds=900, lockout_seconds=1800, clock=monotonic
    )
    limiter.record_failure("198.51.100.1")
    monotonic.advance(901)

    assert asyncio.run(purge_expired_state(store, limiter)) == (1, 1)
    assert len(store) == 1
    assert asyncio.run(purge_expired_state(store, limiter)) == (0, 0)


def test_lifespan_starts_and_stops_cleanly():
    app = create_application()

    with TestClient(app) as client:
        assert client.get("/live").json() == {"status": "alive"}
