# tests/test_auth_service.py
import asyncio

import pytest

from ocwiki.config.settings import Settings
from ocwiki.shared.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    PasswordHashError,
    RateLimitError,
)
from ocwiki.shared.services.auth_service import AdminIdentity, AuthService
from ocwiki.shared.services.rate_limiter import LoginRateLimiter
from ocwiki.shared.services.session_store import InMemorySessionStore
from ocwiki.shared.utils.security import SecurityUtils


CLIENT = "203.0.113.7"


def make_settings(**overrides):
    values = {
        "ADMIN_USERNAME": "admin",
        "ADMIN_PASSWORD": "s3cret",
        "ADMIN_PASSWORD_HASH": "",
        "SESSION_DURATION_SECONDS": 3600,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def store(clock):
    return InMemorySessionStore(duration_seconds=3600, clock=clock)


@pytest.fixture
def limiter(monotonic):
    return LoginRateLimiter(
        max_attempts=5,
        window_seconds=900,
        lockout_seconds=1800,
        clock=monotonic,
    )


@pytest.fixture
def service(store, limiter):
    return AuthService(store, limiter, settings=make_settings())


def login(service, username, password, client_id=CLIENT):
    return asyncio.run(service.login(username, password, client_id))


# ---------------------------------------------------------------------------
# login
# ---------------------------------------------------------------------------

def test_login_success_opens_session(service, store):
    result = login(service, "admin", "s3cret")

    assert result.expires_in == 3600
    assert len(store) == 1
    assert asyncio.run(store.get_session(result.token)) is not None


def test_login_trims_whitespace(service):
    result = login(service, "  admin ", " s3cret\n")
    assert result.token


def test_login_issues_distinct_tokens(service):
    first = login(service, "admin", "s3cret")
    second = login(service, "admin", "s3cret")
    assert first.token != second.token


@pytest.mark.parametrize(
    "username, password",
    [
        ("admin", "wrong"),
        ("root", "s3cret"),
        ("root", "wrong"),
    ],
)
def test_login_failures_share_one_message(service, store, username, password):
    with pytest.raises(AuthenticationError) as exc_info:
        login(service, username, password)

    assert exc_info.value.message == "Invalid username or password"
    assert exc_info.value.status_code == 401
    assert len(store) == 0


def test_login_locks_out_after_repeated_failures(service):
    for _ in range(5):
        with pytest.raises(AuthenticationError):
            login(service, "admin", "wrong")

    with pytest.raises(RateLimitError) as exc_info:
        login(service, "admin", "s3cret")

    assert exc_info.value.retry_after == 1800
    assert exc_info.value.headers == {"Retry-After": "1800"}


def test_lockout_is_per_client(service):
    for _ in range(5):
        with pytest.raises(AuthenticationError):
            login(service, "admin", "wrong", client_id="10.0.0.1")

    assert login(service, "admin", "s3cret", client_id="10.0.0.2").token


def test_successful_login_clears_failures(service):
    for _ in range(4):
        with pytest.raises(AuthenticationError):
            login(service, "admin", "wrong")

    login(service, "admin", "s3cret")

    for _ in range(4):
        with pytest.raises(AuthenticationError):
            login(service, "admin", "wrong")
    assert login(service, "admin", "s3cret").token


@pytest.mark.parametrize(
    "overrides",
    [
        {"ADMIN_USERNAME": ""},
        {"ADMIN_PASSWORD": "", "ADMIN_PASSWORD_HASH": ""},
        {"ADMIN_USERNAME": "   "},
    ],
)
def test_login_without_configured_credentials(store, limiter, overrides):
    service = AuthService(store, limiter, settings=make_settings(**overrides))

    with pytest.raises(ConfigurationError):
        login(service, "admin", "s3cret")


def test_login_with_password_hash(store, limiter):
    password_hash = asyncio.run(SecurityUtils.hash_password("hashed-secret"))
    service = AuthService(
        store,
        limiter,
        settings=make_settings(ADMIN_PASSWORD="", ADMIN_PASSWORD_HASH=password_hash),
    )

    assert login(service, "admin", "hashed-secret").token
    with pytest.raises(AuthenticationError):
        login(service, "admin", "s3cret")


def test_password_hash_takes_precedence_over_plain_password(store, limiter):
    password_hash = asyncio.run(SecurityUtils.hash_password("from-hash"))
    service = AuthService(
        store,
        limiter,
        settings=make_settings(ADMIN_PASSWORD="plain", ADMIN_PASSWORD_HASH=password_hash),
    )

    with pytest.raises(AuthenticationError):
        login(service, "admin", "plain")
    assert login(service, "admin", "from-hash").token


def test_oversized_password_is_a_failed_login(store, limiter):
    password_hash = asyncio.run(SecurityUtils.hash_password("hashed-secret"))
    service = AuthService(
        store,
        limiter,
        settings=make_settings(ADMIN_PASSWORD="", ADMIN_PASSWORD_HASH=password_hash),
    )

    with pytest.raises(AuthenticationError) as exc_info:
        login(service, "admin", "x" * 5000)

    assert exc_info.value.message == "Invalid username or password"
    assert limiter._entries[CLIENT].attempts == 1
    assert len(store) == 0


def test_malformed_password_hash_is_not_reported_as_bad_credentials(store, limiter):
    service = AuthService(
        store,
        limiter,
        settings=make_settings(ADMIN_PASSWORD_HASH="$2b$10$broken"),
    )

    with pytest.raises(PasswordHashError):
        login(service, "admin", "s3cret")
    assert len(store) == 0


# ---------------------------------------------------------------------------
# authenticate / logout
# ---------------------------------------------------------------------------

def test_authenticate_valid_session(service):
    result = login(service, "admin", "s3cret")

    identity = asyncio.run(service.authenticate(result.token))
    assert identity == AdminIdentity(id="admin", username="admin")


@pytest.mark.parametrize("token", [None, "", "not-a-session"])
def test_authenticate_rejects_unknown_tokens(service, token):
    with pytest.raises(AuthenticationError) as exc_info:
        asyncio.run(service.authenticate(token))
    assert exc_info.value.message == "Authentication required"


def test_authenticate_rejects_expired_session(service, clock):
    result = login(service, "admin", "s3cret")
    clock.advance(seconds=3600)

    with pytest.raises(AuthenticationError):
        asyncio.run(service.authenticate(result.token))


def test_logout_revokes_session(service):
    result = login(service, "admin", "s3cret")
    asyncio.run(service.logout(result.token))

    with pytest.raises(AuthenticationError):
        asyncio.run(service.authenticate(result.token))


def test_logout_without_token_is_noop(service):
    asyncio.run(service.logout(None))
