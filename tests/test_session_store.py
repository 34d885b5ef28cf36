# tests/test_session_store.py
import asyncio
import threading

import pytest

from ocwiki.shared.core.exceptions import ServiceUnavailableError
from ocwiki.shared.services.session_store import (
    InMemorySessionStore,
    RedisSessionStore,
    SessionData,
)
from ocwiki.shared.utils.security import SecurityUtils


ONE_DAY = 24 * 60 * 60


# ---------------------------------------------------------------------------
# In-memory backend
# ---------------------------------------------------------------------------

def test_create_and_get_session(clock):
    store = InMemorySessionStore(duration_seconds=ONE_DAY, clock=clock)
    token = SecurityUtils.generate_session_token()

    created = asyncio.run(store.create_session(token))
    found = asyncio.run(store.get_session(token))

    assert found == created
    assert created.created_at == clock.now
    assert (created.expires_at - created.created_at).total_seconds() == ONE_DAY


def test_only_token_hash_is_stored(clock):
    store = InMemorySessionStore(clock=clock)
    token = SecurityUtils.generate_session_token()
    session = asyncio.run(store.create_session(token))

    assert session.token_hash == SecurityUtils.hash_session_token(token)
    assert token not in store._sessions
    assert list(store._sessions) == [session.token_hash]


def test_unknown_token_has_no_session(clock):
    store = InMemorySessionStore(clock=clock)
    assert asyncio.run(store.get_session("never-issued")) is None


def test_expired_session_is_removed_on_read(clock):
    store = InMemorySessionStore(duration_seconds=ONE_DAY, clock=clock)
    token = SecurityUtils.generate_session_token()
    asyncio.run(store.create_session(token))

    clock.advance(seconds=ONE_DAY - 1)
    assert asyncio.run(store.get_session(token)) is not None

    clock.advance(seconds=1)
    assert asyncio.run(store.get_session(token)) is None
    assert len(store) == 0


def test_delete_session(clock):
    store = InMemorySessionStore(clock=clock)
    token = SecurityUtils.generate_session_token()
    asyncio.run(store.create_session(token))

    asyncio.run(store.delete_session(token))
    assert asyncio.run(store.get_session(token)) is None

    # Deleting again is harmless
    asyncio.run(store.delete_session(token))


def test_cleanup_expired_counts_removed(clock):
    store = InMemorySessionStore(duration_seconds=60, clock=clock)
    for _ in range(3):
        asyncio.run(store.create_session(SecurityUtils.generate_session_token()))

    clock.advance(seconds=30)
    fresh = SecurityUtils.generate_session_token()
    asyncio.run(store.create_session(fresh))

    clock.advance(seconds=31)
    assert asyncio.run(store.cleanup_expired()) == 3
    assert len(store) == 1
    assert asyncio.run(store.get_session(fresh)) is not None


def test_zero_duration_is_not_replaced_by_default(clock):
    store = InMemorySessionStore(duration_seconds=0, clock=clock)
    token = SecurityUtils.generate_session_token()
    asyncio.run(store.create_session(token))

    assert store.duration.total_seconds() == 0
    assert asyncio.run(store.get_session(token)) is None


def test_default_duration_is_seven_days():
    store = InMemorySessionStore()
    assert store.duration.total_seconds() == 7 * ONE_DAY


# ---------------------------------------------------------------------------
# Redis backend
# ---------------------------------------------------------------------------

def test_redis_store_round_trip(clock, fake_redis):
    store = RedisSessionStore(fake_redis, duration_seconds=ONE_DAY, clock=clock)
    token = SecurityUtils.generate_session_token()

    created = asyncio.run(store.create_session(token))
    key = f"session:{created.token_hash}"

    assert fake_redis.ttls[key] == ONE_DAY
    assert token not in str(fake_redis.data)
    assert asyncio.run(store.get_session(token)) == created


def test_redis_store_write_failure_raises(clock, fake_redis):
    fake_redis.fail_writes = True
    store = RedisSessionStore(fake_redis, clock=clock)

    with pytest.raises(ServiceUnavailableError):
        asyncio.run(store.create_session(SecurityUtils.generate_session_token()))


def test_redis_store_read_failure_raises(clock, fake_redis):
    store = RedisSessionStore(fake_redis, clock=clock)
    token = SecurityUtils.generate_session_token()
    asyncio.run(store.create_session(token))

    fake_redis.fail_reads = True
    with pytest.raises(ServiceUnavailableError):
        asyncio.run(store.get_session(token))


def test_redis_store_calls_adapter_off_the_event_loop_thread(clock, fake_redis):
    store = RedisSessionStore(fake_redis, clock=clock)
    token = SecurityUtils.generate_session_token()

    asyncio.run(store.create_session(token))
    asyncio.run(store.get_session(token))
    asyncio.run(store.delete_session(token))

    assert fake_redis.threads
    assert threading.get_ident() not in fake_redis.threads


def test_redis_store_ignores_malformed_record(clock, fake_redis):
    store = RedisSessionStore(fake_redis, clock=clock)
    token = "some-token"
    fake_redis.data[f"session:{SecurityUtils.hash_session_token(token)}"] = {"bogus": 1}

    assert asyncio.run(store.get_session(token)) is None


def test_redis_store_drops_expired_record(clock, fake_redis):
    store = RedisSessionStore(fake_redis, duration_seconds=60, clock=clock)
    token = SecurityUtils.generate_session_token()
    created = asyncio.run(store.create_session(token))

    clock.advance(seconds=61)
    assert asyncio.run(store.get_session(token)) is None
    assert f"session:{created.token_hash}" not in fake_redis.data


def test_redis_store_delete_and_cleanup(clock, fake_redis):
    store = RedisSessionStore(fake_redis, clock=clock)
    token = SecurityUtils.generate_session_token()
    asyncio.run(store.create_session(token))

    asyncio.run(store.delete_session(token))
    assert fake_redis.data == {}
    assert asyncio.run(store.cleanup_expired()) == 0


def test_session_data_dict_round_trip(clock):
    session = SessionData(
        token_hash="ab" * 32,
        created_at=clock.now,
        expires_at=clock.now,
    )
    assert SessionData.from_dict(session.to_dict()) == session
