"""Fixed-window rate limiting for login attempts."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Protocol

import redis

from backend.condo.config import get_settings


@dataclass
class RetryAfter:
    """Rate limit retry-after information."""

    seconds: int


class RateLimiter(Protocol):
    """Rate limiter interface."""

    def check_quota(self, key: str, now: datetime) -> RetryAfter | None:
        """Check if quota is available.

        Args:
            key: Rate limit key
            now: Current timestamp

        Returns:
            RetryAfter if over quota, None if allowed
        """
        ...


def make_rate_limit_key(bucket: str, client: str) -> str:
    """Create rate limit key from bucket and client address."""
    return f"{bucket}:{client}"


class RedisRateLimiter:
    """Redis-based rate limiter using INCR + EXPIRE pattern."""

    def __init__(self, redis_client: redis.Redis, max_requests: int, window_seconds: int = 60) -> None:
        self._redis = redis_client
        self._max_requests = max_requests
        self._window_seconds = window_seconds

    def check_quota(self, key: str, now: datetime) -> RetryAfter | None:
        # Use a window-aligned key
        window_start = int(now.timestamp() / self._window_seconds) * self._window_seconds
        redis_key = f"ratelimit:{key}:{window_start}"

        count = self._redis.incr(redis_key)
        if count == 1:
            self._redis.expire(redis_key, self._window_seconds)

        if count > self._max_requests:
            ttl = self._redis.ttl(redis_key)
            return RetryAfter(seconds=max(1, ttl))

        return None


class InMemoryRateLimiter:
    """Process-local fixed window, used when no Redis is configured."""

    def __init__(self, max_requests: int, window_seconds: int = 60) -> None:
        self._max_requests = max_requests
        self._window_seconds = window_seconds
        self._windows: dict[str, tuple[datetime, int]] = {}

    def __len__(self) -> int:
        return len(self._windows)

    def _sweep(self, now: datetime, window: timedelta) -> None:
        expired = [k for k, (start, _) in self._windows.items() if start + window <= now]
        for k in expired:
            del self._windows[k]

    def check_quota(self, key: str, now: datetime) -> RetryAfter | None:
        window = timedelta(seconds=self._window_seconds)
        self._sweep(now, window)

        if key not in self._windows or now >= self._windows[key][0] + window:
            self._windows[key] = (now, 1)
            return None

        window_start, count = self._windows[key]
        if count >= self._max_requests:
            seconds_remaining = int((window_start + window - now).total_seconds())
            return RetryAfter(seconds=max(1, seconds_remaining))

        self._windows[key] = (window_start, count + 1)
        return None


@lru_cache
def get_login_limiter() -> RateLimiter:
    """Redis limiter when REDIS_URL is set, in-memory otherwise."""
    settings = get_settings()
    if settings.redis_url:
        client = redis.from_url(settings.redis_url, decode_responses=True)  # type: ignore[no-untyped-call]
        return RedisRateLimiter(client, settings.login_attempts_per_min)
    return InMemoryRateLimiter(settings.login_attempts_per_min)
