"""Repository protocol interfaces for data access."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from tourdesk.app.models.common import Company
from tourdesk.app.models.dashboard import VoucherTotals
from tourdesk.app.models.itinerary import Itinerary, ItineraryDraft, ItinerarySummary
from tourdesk.app.models.voucher import Voucher, VoucherDraft


class TravelIdLookup(Protocol):
    """Existence check used by the travel ID generator."""

    def exists(self, travel_id: str) -> bool:
        """Return True if an itinerary with this travel ID is stored."""
        ...


class ItineraryRepository(Protocol):
    """Repository for itinerary operations.

    Implementations must reject a second itinerary with the same travel ID
    by raising DuplicateTravelIdError from add_itinerary. That constraint is
    the source of truth for travel ID uniqueness; the generator's existence
    check only makes collisions unlikely.
    """

    def exists(self, travel_id: str) -> bool:
        """Return True if an itinerary with this travel ID is stored."""
        ...

    def add_itinerary(self, draft: ItineraryDraft) -> Itinerary:
        """Persist a new itinerary.

        Args:
            draft: Itinerary data with travel_id already set

        Returns:
            Stored itinerary with timestamps

        Raises:
            DuplicateTravelIdError: If the travel ID is already stored
        """
        ...

    def get_itinerary(self, travel_id: str) -> Itinerary | None:
        """Get itinerary by travel ID.

        Args:
            travel_id: Travel ID

        Returns:
            Itinerary or None if not found
        """
        ...

    def find_by_client_phone(self, client_phone: str) -> Itinerary | None:
        """Get the itinerary using a client phone number, if any."""
        ...

    def list_itineraries(
        self,
        *,
        search: str | None = None,
        company: Company | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[ItinerarySummary]:
        """List itineraries, newest first.

        Args:
            search: Case-insensitive match on travel ID, client name or package title
            company: Restrict to one company
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of itinerary summaries
        """
        ...

    def update_itinerary(self, travel_id: str, draft: ItineraryDraft) -> Itinerary | None:
        """Overwrite the editable fields of a stored itinerary.

        The stored travel_id, company and created_at are kept.

        Returns:
            Updated itinerary or None if not found
        """
        ...

    def delete_itinerary(self, travel_id: str) -> bool:
        """Delete an itinerary together with its voucher, in one step.

        Returns False if the itinerary did not exist.
        """
        ...


class VoucherRepository(Protocol):
    """Repository for voucher operations. One voucher per travel ID."""

    def add_voucher(self, draft: VoucherDraft) -> Voucher:
        """Persist a new voucher.

        Raises:
            VoucherExistsError: If a voucher is already stored for the travel ID
            ItineraryNotFoundError: If no itinerary has the travel ID
        """
        ...

    def get_voucher(self, travel_id: str) -> Voucher | None:
        """Get voucher by travel ID."""
        ...

    def list_vouchers(
        self,
        *,
        search: str | None = None,
        company: Company | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Voucher]:
        """List vouchers newest first.

        Args:
            search: Case-insensitive match on travel ID or client name
            company: Restrict to vouchers whose travel ID carries the company prefix
            limit: Maximum number of results
            offset: Number of results to skip
        """
        ...

    def update_voucher(self, travel_id: str, draft: VoucherDraft) -> Voucher | None:
        """Overwrite a stored voucher. Returns None if not found."""
        ...

    def delete_voucher(self, travel_id: str) -> bool:
        """Delete a voucher. Returns False if it did not exist."""
        ...


class DashboardRepository(Protocol):
    """Aggregate figures over stored itineraries and vouchers.

    Every method counts only rows created within [date_from, date_to]; a missing
    bound leaves that side open.
    """

    def count_itineraries_by_company(
        self, date_from: datetime | None = None, date_to: datetime | None = None
    ) -> dict[Company, int]:
        ...

    def count_itineraries_by_advisor(
        self,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        limit: int = 10,
    ) -> list[tuple[str, int]]:
        """Trip advisors by itinerary count, highest first, blank names excluded."""
        ...

    def count_vouchers_by_company(
        self, date_from: datetime | None = None, date_to: datetime | None = None
    ) -> dict[Company, int]:
        ...

    def voucher_totals(
        self, date_from: datetime | None = None, date_to: datetime | None = None
    ) -> VoucherTotals:
        """Voucher count, how many list hotels, and summed nights and guests."""
        ...


@dataclass
class RetryAfter:
    """Rate limit retry-after information."""

    seconds: int


class RateLimiter(Protocol):
    """Rate limiter interface."""

    def check_quota(self, key: str, limit: int, now: datetime) -> RetryAfter | None:
        """Count one request and check it against the quota.

        Args:
            key: Rate limit key
            limit: Requests allowed per window for this key
            now: Current timestamp

        Returns:
            RetryAfter if over quota, None if allowed
        """
        ...
