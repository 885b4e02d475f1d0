"""Admin dashboard figures for itineraries and vouchers."""

import logging
from datetime import datetime

from tourdesk.app.db.repositories import DashboardRepository
from tourdesk.app.errors import InvalidDateRangeError
from tourdesk.app.models.common import Company
from tourdesk.app.models.dashboard import AdvisorCount, CompanyCount, DashboardStats

logger = logging.getLogger(__name__)

TOP_ADVISORS = 10


def _per_company(counts: dict[Company, int]) -> list[CompanyCount]:
    """One entry per company, zero when it has no rows."""
    return [
        CompanyCount(company=company, prefix=company.prefix, count=counts.get(company, 0))
        for company in Company
    ]


class DashboardService:
    def __init__(self, stats: DashboardRepository) -> None:
        self._stats = stats

    def stats(
        self, date_from: datetime | None = None, date_to: datetime | None = None
    ) -> DashboardStats:
        """Collect dashboard figures for records created within the range.

        Raises:
            InvalidDateRangeError: If date_from is after date_to
        """
        if date_from is not None and date_to is not None and date_from > date_to:
            raise InvalidDateRangeError(date_from, date_to)

        itineraries = self._stats.count_itineraries_by_company(date_from, date_to)
        advisors = self._stats.count_itineraries_by_advisor(date_from, date_to, TOP_ADVISORS)
        vouchers = self._stats.count_vouchers_by_company(date_from, date_to)
        totals = self._stats.voucher_totals(date_from, date_to)

        logger.debug(f"Dashboard stats from={date_from} to={date_to} vouchers={totals.vouchers}")
        return DashboardStats(
            date_from=date_from,
            date_to=date_to,
            total_itineraries=sum(itineraries.values()),
            total_vouchers=totals.vouchers,
            itineraries_by_company=_per_company(itineraries),
            itineraries_by_advisor=[
                AdvisorCount(advisor=name, count=count) for name, count in advisors
            ],
            vouchers_by_company=_per_company(vouchers),
            vouchers_with_hotels=totals.with_hotels,
            vouchers_without_hotels=totals.vouchers - totals.with_hotels,
            total_voucher_nights=totals.nights,
            total_voucher_guests=totals.guests,
        )
