"""Tests for login attempt rate limiting."""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

from backend.condo.ratelimit import InMemoryRateLimiter, RedisRateLimiter, make_rate_limit_key


def test_key_is_per_client() -> None:
    assert make_rate_limit_key("login", "10.0.0.7") == "login:10.0.0.7"


def test_in_memory_blocks_after_quota() -> None:
    limiter = InMemoryRateLimiter(max_requests=3, window_seconds=60)
    now = datetime(2024, 2, 1, 12, 0, 0)
    key = make_rate_limit_key("login", "10.0.0.7")

    for i in range(3):
        assert limiter.check_quota(key, now + timedelta(seconds=i)) is None

    retry_after = limiter.check_quota(key, now + timedelta(seconds=10))
    assert retry_after is not None
    assert retry_after.seconds == 50


def test_in_memory_window_resets() -> None:
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=60)
    now = datetime(2024, 2, 1, 12, 0, 0)

    assert limiter.check_quota("login:a", now) is None
    assert limiter.check_quota("login:a", now) is not None
    assert limiter.check_quota("login:a", now + timedelta(seconds=60)) is None


def test_in_memory_clients_are_independent() -> None:
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=60)
    now = datetime(2024, 2, 1, 12, 0, 0)

    assert limiter.check_quota("login:a", now) is None
    assert limiter.check_quota("login:b", now) is None


def test_redis_limiter_sets_expiry_on_first_hit() -> None:
    client = MagicMock()
    client.incr.return_value = 1
    limiter = RedisRateLimiter(client, max_requests=2, window_seconds=60)

    assert limiter.check_quota("login:a", datetime(2024, 2, 1, 12, 0, 30)) is None

    redis_key = client.incr.call_args.args[0]
    assert redis_key.startswith("ratelimit:login:a:")
    client.expire.assert_called_once_with(redis_key, 60)


def test_redis_limiter_reports_ttl_when_over() -> None:
    client = MagicMock()
    client.incr.return_value = 3
    client.ttl.return_value = 17
    limiter = RedisRateLimiter(client, max_requests=2, window_seconds=60)

    retry_after = limiter.check_quota("login:a", datetime(2024, 2, 1, 12, 0, 43))

    assert retry_after is not None
    assert retry_after.seconds == 17
    client.expire.assert_not_called()


def test_in_memory_drops_expired_windows() -> None:
    limiter = InMemoryRateLimiter(max_requests=1, window_seconds=60)
    now = datetime(2024, 2, 1, 12, 0, 0)

    for i in range(50):
        limiter.check_quota(f"login:10.0.0.{i}", now)
    assert len(limiter) == 50

    limiter.check_quota("login:10.0.1.1", now + timedelta(seconds=61))
    assert len(limiter) == 1
