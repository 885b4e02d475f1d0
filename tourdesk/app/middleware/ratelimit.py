"""Per-client quotas on write endpoints.

Requests that allocate travel IDs (creating or cloning an itinerary) run the
collision-retry loop and get their own, smaller bucket. Every other write to
itineraries or vouchers shares the ``crud`` bucket. Reads are never limited.
"""

import re
from dataclasses import dataclass
from datetime import datetime

from tourdesk.app.config import Settings
from tourdesk.app.db.repositories import RateLimiter
from tourdesk.app.ratelimit import make_rate_limit_key

ALLOCATE_BUCKET = "allocate"
CRUD_BUCKET = "crud"


@dataclass(frozen=True)
class RateLimitRule:
    """Requests with one of methods and a path matching pattern count against bucket."""

    bucket: str
    methods: frozenset[str]
    pattern: re.Pattern[str]

    def matches(self, method: str, path: str) -> bool:
        return method.upper() in self.methods and self.pattern.match(path) is not None


DEFAULT_RULES: tuple[RateLimitRule, ...] = (
    RateLimitRule(
        ALLOCATE_BUCKET,
        frozenset({"POST"}),
        re.compile(r"^/itineraries(/[^/]+/clone)?/?$"),
    ),
    RateLimitRule(
        CRUD_BUCKET,
        frozenset({"POST", "PUT", "DELETE"}),
        re.compile(r"^/(itineraries|vouchers)(/|$)"),
    ),
)


class RateLimitPolicy:
    """Picks the bucket for a request and checks the client's quota in it."""

    def __init__(
        self,
        limiter: RateLimiter,
        quotas: dict[str, int],
        rules: tuple[RateLimitRule, ...] = DEFAULT_RULES,
    ) -> None:
        """Initialize policy.

        Args:
            limiter: Counter implementation (in-memory or Redis)
            quotas: Requests per window for each bucket
            rules: Ordered rules; the first match decides the bucket
        """
        self._limiter = limiter
        self._quotas = quotas
        self._rules = rules

    @classmethod
    def from_settings(cls, limiter: RateLimiter, settings: Settings) -> "RateLimitPolicy":
        return cls(
            limiter,
            {
                ALLOCATE_BUCKET: settings.travel_id_allocations_per_min,
                CRUD_BUCKET: settings.crud_ops_per_min,
            },
        )

    def bucket_for(self, method: str, path: str) -> str | None:
        for rule in self._rules:
            if rule.matches(method, path):
                return rule.bucket
        return None

    def check(
        self, method: str, path: str, client_key: str, now: datetime | None = None
    ) -> tuple[bool, int]:
        """Count the request if it falls in a bucket.

        Returns:
            Tuple of (allowed, retry_after_seconds)
        """
        bucket = self.bucket_for(method, path)
        if bucket is None:
            return (True, 0)

        retry_after = self._limiter.check_quota(
            make_rate_limit_key(client_key, bucket),
            self._quotas[bucket],
            now or datetime.now(),
        )
        if retry_after is None:
            return (True, 0)

        return (False, retry_after.seconds)
