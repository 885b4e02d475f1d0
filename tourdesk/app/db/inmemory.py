"""In-memory implementations of repository interfaces."""

from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta

from tourdesk.app.db.repositories import RetryAfter
from tourdesk.app.errors import DuplicateTravelIdError, VoucherExistsError
from tourdesk.app.models.common import Company
from tourdesk.app.models.dashboard import VoucherTotals
from tourdesk.app.models.itinerary import Itinerary, ItineraryDraft, ItinerarySummary
from tourdesk.app.models.voucher import Voucher, VoucherDraft


def _matches(search: str | None, *values: str) -> bool:
    if not search:
        return True
    term = search.lower()
    return any(term in value.lower() for value in values)


def _created_between(
    created_at: datetime, date_from: datetime | None, date_to: datetime | None
) -> bool:
    if date_from is not None and created_at < date_from:
        return False
    if date_to is not None and created_at > date_to:
        return False
    return True


class InMemoryVoucherRepository:
    """In-memory implementation of VoucherRepository."""

    def __init__(self) -> None:
        self._vouchers: dict[str, Voucher] = {}

    def add_voucher(self, draft: VoucherDraft) -> Voucher:
        """Persist a new voucher."""
        if draft.travel_id in self._vouchers:
            raise VoucherExistsError(draft.travel_id)

        now = datetime.now()
        voucher = Voucher(**draft.model_dump(), created_at=now, updated_at=now)

        self._vouchers[voucher.travel_id] = voucher
        return voucher

    def get_voucher(self, travel_id: str) -> Voucher | None:
        """Get voucher by travel ID."""
        return self._vouchers.get(travel_id)

    def stored(self) -> list[Voucher]:
        return list(self._vouchers.values())

    def list_vouchers(
        self,
        *,
        search: str | None = None,
        company: Company | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Voucher]:
        """List vouchers, newest first."""
        results = [
            voucher
            for voucher in self._vouchers.values()
            if _matches(search, voucher.travel_id, voucher.client_name)
            and (company is None or voucher.travel_id.startswith(company.prefix))
        ]
        results.sort(key=lambda x: (x.created_at, x.travel_id), reverse=True)

        return results[offset : offset + limit]

    def update_voucher(self, travel_id: str, draft: VoucherDraft) -> Voucher | None:
        """Overwrite a stored voucher."""
        stored = self._vouchers.get(travel_id)

        if stored is None:
            return None

        updated = Voucher(
            **draft.model_dump(exclude={"travel_id"}),
            travel_id=stored.travel_id,
            created_at=stored.created_at,
            updated_at=datetime.now(),
        )

        self._vouchers[travel_id] = updated
        return updated

    def delete_voucher(self, travel_id: str) -> bool:
        """Delete a voucher."""
        return self._vouchers.pop(travel_id, None) is not None


class InMemoryItineraryRepository:
    """In-memory implementation of ItineraryRepository.

    When linked to a voucher repository, deleting an itinerary also drops its
    voucher, matching the foreign key cascade of the SQL schema.
    """

    def __init__(self, vouchers: InMemoryVoucherRepository | None = None) -> None:
        self._itineraries: dict[str, Itinerary] = {}
        self._vouchers = vouchers

    def exists(self, travel_id: str) -> bool:
        """Check whether a travel ID is taken."""
        return travel_id in self._itineraries

    def add_itinerary(self, draft: ItineraryDraft) -> Itinerary:
        """Persist a new itinerary."""
        if draft.travel_id is None:
            raise ValueError("travel_id must be allocated before persisting")

        # Uniqueness constraint
        if draft.travel_id in self._itineraries:
            raise DuplicateTravelIdError(draft.travel_id)

        now = datetime.now()
        itinerary = Itinerary(
            **draft.model_dump(exclude={"travel_id"}),
            travel_id=draft.travel_id,
            created_at=now,
            updated_at=now,
        )

        self._itineraries[itinerary.travel_id] = itinerary
        return itinerary

    def get_itinerary(self, travel_id: str) -> Itinerary | None:
        """Get itinerary by travel ID."""
        return self._itineraries.get(travel_id)

    def stored(self) -> list[Itinerary]:
        return list(self._itineraries.values())

    def find_by_client_phone(self, client_phone: str) -> Itinerary | None:
        """Get the itinerary using a client phone number."""
        for itinerary in self._itineraries.values():
            if itinerary.client_phone == client_phone:
                return itinerary
        return None

    def list_itineraries(
        self,
        *,
        search: str | None = None,
        company: Company | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[ItinerarySummary]:
        """List itineraries, newest first."""
        results = [
            ItinerarySummary.from_itinerary(itinerary)
            for itinerary in self._itineraries.values()
            if _matches(search, itinerary.travel_id, itinerary.client_name, itinerary.package_title)
            and (company is None or itinerary.company == company)
        ]

        # Sort by created_at descending
        results.sort(key=lambda x: (x.created_at, x.travel_id), reverse=True)

        return results[offset : offset + limit]

    def update_itinerary(self, travel_id: str, draft: ItineraryDraft) -> Itinerary | None:
        """Overwrite the editable fields of a stored itinerary."""
        stored = self._itineraries.get(travel_id)

        if stored is None:
            return None

        updated = Itinerary(
            **draft.model_dump(exclude={"travel_id", "company"}),
            travel_id=stored.travel_id,
            company=stored.company,
            created_at=stored.created_at,
            updated_at=datetime.now(),
        )

        self._itineraries[travel_id] = updated
        return updated

    def delete_itinerary(self, travel_id: str) -> bool:
        """Delete an itinerary and its voucher."""
        if self._itineraries.pop(travel_id, None) is None:
            return False

        if self._vouchers is not None:
            self._vouchers.delete_voucher(travel_id)
        return True


class InMemoryDashboardRepository:
    """In-memory implementation of DashboardRepository."""

    def __init__(
        self, itineraries: InMemoryItineraryRepository, vouchers: InMemoryVoucherRepository
    ) -> None:
        self._itineraries = itineraries
        self._vouchers = vouchers

    def _itineraries_between(
        self, date_from: datetime | None, date_to: datetime | None
    ) -> list[Itinerary]:
        return [
            itinerary
            for itinerary in self._itineraries.stored()
            if _created_between(itinerary.created_at, date_from, date_to)
        ]

    def _vouchers_between(
        self, date_from: datetime | None, date_to: datetime | None
    ) -> list[Voucher]:
        return [
            voucher
            for voucher in self._vouchers.stored()
            if _created_between(voucher.created_at, date_from, date_to)
        ]

    def count_itineraries_by_company(
        self, date_from: datetime | None = None, date_to: datetime | None = None
    ) -> dict[Company, int]:
        return dict(Counter(i.company for i in self._itineraries_between(date_from, date_to)))

    def count_itineraries_by_advisor(
        self,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        limit: int = 10,
    ) -> list[tuple[str, int]]:
        counts = Counter(
            i.trip_advisor_name
            for i in self._itineraries_between(date_from, date_to)
            if i.trip_advisor_name.strip()
        )
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:limit]

    def count_vouchers_by_company(
        self, date_from: datetime | None = None, date_to: datetime | None = None
    ) -> dict[Company, int]:
        counts: Counter[Company] = Counter()
        for voucher in self._vouchers_between(date_from, date_to):
            company = Company.from_travel_id(voucher.travel_id)
            if company is not None:
                counts[company] += 1
        return dict(counts)

    def voucher_totals(
        self, date_from: datetime | None = None, date_to: datetime | None = None
    ) -> VoucherTotals:
        vouchers = self._vouchers_between(date_from, date_to)
        return VoucherTotals(
            vouchers=len(vouchers),
            with_hotels=sum(1 for v in vouchers if v.hotel_stays),
            nights=sum(v.total_nights for v in vouchers),
            guests=sum(v.adult_no + v.children_no for v in vouchers),
        )


@dataclass
class _Window:
    started_at: datetime
    count: int = 0


class InMemoryRateLimiter:
    """Fixed-window request counter per key, for single-process deployments."""

    def __init__(self, window_seconds: int = 60) -> None:
        self._window = timedelta(seconds=window_seconds)
        self._windows: dict[str, _Window] = {}

    def check_quota(self, key: str, limit: int, now: datetime) -> RetryAfter | None:
        """Count one request against key; over limit returns the wait until reset."""
        window = self._windows.get(key)
        if window is None or now >= window.started_at + self._window:
            window = _Window(started_at=now)
            self._windows[key] = window

        if window.count >= limit:
            remaining = window.started_at + self._window - now
            return RetryAfter(seconds=max(1, int(remaining.total_seconds())))

        window.count += 1
        return None
