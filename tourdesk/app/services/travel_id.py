"""Travel ID allocation for itineraries.

A travel ID reads ``<PREFIX><DDMMYYYY><HHmm><NNNN>``, e.g. ``TRL180420261430`` plus
a four digit random suffix. Allocation is optimistic: each candidate is checked
against storage and, on a collision, the generator waits briefly so the next
candidate lands on a different minute or suffix. Nothing is locked between the
check and the caller's insert, so the storage unique constraint on travel_id
remains the guarantee; this loop only makes a rejected insert unlikely.
"""

import logging
import random
import time
from collections.abc import Callable
from datetime import datetime

from tourdesk.app.config import Settings
from tourdesk.app.db.repositories import TravelIdLookup
from tourdesk.app.errors import TravelIdAllocationError
from tourdesk.app.models.common import Company
from tourdesk.app.utils.metrics import PrometheusTravelIdMetrics

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_RETRY_DELAY_SECONDS = 0.1
SUFFIX_MAX = 9999


def format_travel_id(company: Company, moment: datetime, suffix: int) -> str:
    """Build a travel ID from its parts.

    Args:
        company: Company the itinerary is sold under (selects the prefix)
        moment: Wall-clock time of allocation
        suffix: Random integer in [0, 9999]

    Returns:
        Travel ID string, always 19 characters
    """
    if not 0 <= suffix <= SUFFIX_MAX:
        raise ValueError(f"suffix must be in [0, {SUFFIX_MAX}], got {suffix}")
    return f"{company.prefix}{moment:%d%m%Y%H%M}{suffix:04d}"


class TravelIdGenerator:
    """Allocates travel IDs that do not collide with stored itineraries."""

    def __init__(
        self,
        lookup: TravelIdLookup,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
        metrics: PrometheusTravelIdMetrics | None = None,
    ) -> None:
        """Initialize generator.

        Args:
            lookup: Existence check against stored itineraries
            max_attempts: Candidates to try before giving up
            retry_delay_seconds: Pause between a collision and the next candidate
            clock: Source of wall-clock time
            rng: Random source for the suffix
            sleep: Blocking sleep used between attempts
            metrics: Attempt and failure counters
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self._lookup = lookup
        self._max_attempts = max_attempts
        self._retry_delay_seconds = retry_delay_seconds
        self._clock = clock
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._metrics = metrics or PrometheusTravelIdMetrics()

    @classmethod
    def from_settings(cls, lookup: TravelIdLookup, settings: Settings) -> "TravelIdGenerator":
        """Build a generator using configured attempt count and delay."""
        return cls(
            lookup,
            max_attempts=settings.travel_id_max_attempts,
            retry_delay_seconds=settings.travel_id_retry_delay_ms / 1000,
        )

    def candidate(self, company: Company) -> str:
        """Produce one unchecked candidate for the current time."""
        return format_travel_id(company, self._clock(), self._rng.randint(0, SUFFIX_MAX))

    def generate(self, company: Company) -> str:
        """Allocate a travel ID not currently present in storage.

        Raises:
            TravelIdAllocationError: If every attempt collided
        """
        for attempt in range(1, self._max_attempts + 1):
            travel_id = self.candidate(company)

            if not self._lookup.exists(travel_id):
                self._metrics.record_attempt(company.value, "free")
                if attempt > 1:
                    logger.info(f"Allocated travel_id={travel_id} on attempt {attempt}")
                return travel_id

            self._metrics.record_attempt(company.value, "collision")
            logger.warning(
                f"travel_id={travel_id} already exists "
                f"(attempt {attempt}/{self._max_attempts})",
                extra={"structured": {"company": company.value, "attempt": attempt}},
            )

            if attempt < self._max_attempts:
                self._sleep(self._retry_delay_seconds)

        self._metrics.inc_failure(company.value)
        logger.error(
            f"Could not allocate a unique travel_id for {company.value} "
            f"after {self._max_attempts} attempts"
        )
        raise TravelIdAllocationError(company.value, self._max_attempts)
