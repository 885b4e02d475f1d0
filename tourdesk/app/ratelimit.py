"""Redis-backed request counting for rate limits shared across workers."""

from datetime import datetime

import redis

from tourdesk.app.db.repositories import RetryAfter


def make_rate_limit_key(client_key: str, bucket: str) -> str:
    """Key one client's usage of one bucket, e.g. ``allocate:10.0.0.1``."""
    return f"{bucket}:{client_key}"


class RedisRateLimiter:
    """Fixed window per key; the key's TTL marks when the window resets."""

    def __init__(self, redis_client: redis.Redis, window_seconds: int = 60) -> None:
        self._redis = redis_client
        self._window_seconds = window_seconds

    def check_quota(self, key: str, limit: int, now: datetime) -> RetryAfter | None:
        """Count one request against key.

        The first request of a window starts the TTL. A key left without a TTL
        (e.g. a crash between INCR and EXPIRE) gets one on the next request.
        """
        redis_key = f"ratelimit:{key}"

        pipe = self._redis.pipeline()
        pipe.incr(redis_key)
        pipe.ttl(redis_key)
        count, ttl = pipe.execute()

        if ttl < 0:
            self._redis.expire(redis_key, self._window_seconds)
            ttl = self._window_seconds

        if count > limit:
            return RetryAfter(seconds=max(1, ttl))

        return None
