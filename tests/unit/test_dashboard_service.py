"""Tests for DashboardService over in-memory repositories."""

from collections.abc import Callable
from datetime import datetime
from typing import Any
from unittest.mock import patch

import pytest

from tourdesk.app.db.inmemory import (
    InMemoryDashboardRepository,
    InMemoryItineraryRepository,
    InMemoryVoucherRepository,
)
from tourdesk.app.errors import InvalidDateRangeError
from tourdesk.app.models.common import Company
from tourdesk.app.models.itinerary import ItineraryDraft
from tourdesk.app.models.voucher import VoucherDraft, VoucherHotelStay
from tourdesk.app.services.dashboard import DashboardService

DraftFactory = Callable[..., ItineraryDraft]


def created_on(when: datetime) -> Any:
    """Pin the timestamp the in-memory repositories stamp on new records."""
    return patch("tourdesk.app.db.inmemory.datetime", **{"now.return_value": when})


def voucher_draft(travel_id: str, nights: int = 2, adults: int = 2) -> VoucherDraft:
    stays = [VoucherHotelStay(hotel_name="Lake View", nights=nights)] if nights else []
    return VoucherDraft(
        travel_id=travel_id,
        client_name="Asha Verma",
        adult_no=adults,
        total_nights=nights,
        hotel_stays=stays,
        cab_details="Sedan",
    )


@pytest.fixture
def service(dashboard_repo: InMemoryDashboardRepository) -> DashboardService:
    return DashboardService(dashboard_repo)


@pytest.fixture
def seeded(
    itinerary_repo: InMemoryItineraryRepository,
    voucher_repo: InMemoryVoucherRepository,
    make_draft: DraftFactory,
) -> None:
    """Three itineraries in March and April 2026, two with vouchers."""
    with created_on(datetime(2026, 3, 20, 10, 0)):
        itinerary_repo.add_itinerary(
            make_draft(travel_id="TRL2003202610000001", trip_advisor_name="Ravi")
        )
        voucher_repo.add_voucher(voucher_draft("TRL2003202610000001", nights=3))
    with created_on(datetime(2026, 4, 2, 10, 0)):
        itinerary_repo.add_itinerary(
            make_draft(
                travel_id="TTH0204202610000002",
                company="TRAVEL_TRAIL_HOLIDAYS",
                trip_advisor_name="Meera",
                client_phone="9000000002",
            )
        )
        voucher_repo.add_voucher(voucher_draft("TTH0204202610000002", nights=0, adults=3))
    with created_on(datetime(2026, 4, 5, 10, 0)):
        itinerary_repo.add_itinerary(
            make_draft(
                travel_id="TRL0504202610000003", trip_advisor_name="Ravi", client_phone="9000000003"
            )
        )


def test_empty_stats_list_every_company(service: DashboardService) -> None:
    stats = service.stats()

    assert stats.total_itineraries == 0
    assert stats.total_vouchers == 0
    assert [(c.company, c.prefix, c.count) for c in stats.itineraries_by_company] == [
        (Company.TOURILLO, "TRL", 0),
        (Company.TRAVEL_TRAIL_HOLIDAYS, "TTH", 0),
    ]
    assert [c.count for c in stats.vouchers_by_company] == [0, 0]
    assert stats.itineraries_by_advisor == []


@pytest.mark.usefixtures("seeded")
def test_stats_all_time(service: DashboardService) -> None:
    stats = service.stats()

    assert stats.total_itineraries == 3
    assert [c.count for c in stats.itineraries_by_company] == [2, 1]
    assert [(a.advisor, a.count) for a in stats.itineraries_by_advisor] == [
        ("Ravi", 2),
        ("Meera", 1),
    ]
    assert stats.total_vouchers == 2
    assert [c.count for c in stats.vouchers_by_company] == [1, 1]
    assert stats.vouchers_with_hotels == 1
    assert stats.vouchers_without_hotels == 1
    assert stats.total_voucher_nights == 3
    assert stats.total_voucher_guests == 5


@pytest.mark.usefixtures("seeded")
def test_stats_within_date_range(service: DashboardService) -> None:
    """Test only records created inside the range are counted."""
    stats = service.stats(date_from=datetime(2026, 4, 1), date_to=datetime(2026, 4, 30))

    assert stats.date_from == datetime(2026, 4, 1)
    assert stats.total_itineraries == 2
    assert [c.count for c in stats.itineraries_by_company] == [1, 1]
    assert stats.total_vouchers == 1
    assert stats.vouchers_without_hotels == 1
    assert stats.total_voucher_nights == 0
    assert stats.total_voucher_guests == 3


@pytest.mark.usefixtures("seeded")
def test_open_ended_range(service: DashboardService) -> None:
    assert service.stats(date_to=datetime(2026, 3, 31)).total_itineraries == 1
    assert service.stats(date_from=datetime(2026, 4, 3)).total_itineraries == 1


def test_blank_advisors_are_skipped(
    service: DashboardService, itinerary_repo: InMemoryItineraryRepository, make_draft: DraftFactory
) -> None:
    itinerary_repo.add_itinerary(make_draft(travel_id="TRL2003202610000001", trip_advisor_name=" "))

    stats = service.stats()

    assert stats.total_itineraries == 1
    assert stats.itineraries_by_advisor == []


def test_advisors_capped_at_ten(
    service: DashboardService, itinerary_repo: InMemoryItineraryRepository, make_draft: DraftFactory
) -> None:
    for n in range(12):
        itinerary_repo.add_itinerary(
            make_draft(
                travel_id=f"TRL20032026100000{n:02d}",
                trip_advisor_name=f"Advisor {n:02d}",
                client_phone=f"90000000{n:02d}",
            )
        )

    advisors = service.stats().itineraries_by_advisor

    assert len(advisors) == 10
    assert advisors[0].advisor == "Advisor 00"


def test_reversed_range_raises(service: DashboardService) -> None:
    with pytest.raises(InvalidDateRangeError):
        service.stats(date_from=datetime(2026, 5, 1), date_to=datetime(2026, 4, 1))
