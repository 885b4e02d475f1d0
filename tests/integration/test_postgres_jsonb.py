"""PostgreSQL tests for JSONB content columns and the voucher foreign key.

Run with DATABASE_URL pointing at a PostgreSQL database; skipped otherwise.
"""

from collections.abc import Callable

import pytest
from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from tourdesk.app.db.sql_repositories import SqlItineraryRepository, SqlVoucherRepository
from tourdesk.app.models.itinerary import ItineraryDraft
from tourdesk.app.models.voucher import VoucherDraft, VoucherHotelStay

pytestmark = [pytest.mark.integration, pytest.mark.postgres]

TRAVEL_ID = "TRL1804202614300042"


def test_content_columns_are_jsonb(postgres_engine: Engine) -> None:
    columns = {c["name"]: c for c in inspect(postgres_engine).get_columns("itinerary")}

    for name in ("days", "hotels", "inclusions", "exclusions"):
        assert columns[name]["type"].__class__.__name__ == "JSONB"


def test_voucher_removed_with_itinerary(
    postgres_engine: Engine, make_draft: Callable[..., ItineraryDraft]
) -> None:
    with Session(postgres_engine, expire_on_commit=False) as session:
        itineraries = SqlItineraryRepository(session)
        vouchers = SqlVoucherRepository(session)

        itineraries.add_itinerary(make_draft(travel_id=TRAVEL_ID))
        vouchers.add_voucher(
            VoucherDraft(
                travel_id=TRAVEL_ID,
                client_name="Asha Verma",
                adult_no=2,
                total_nights=1,
                hotel_stays=[VoucherHotelStay(hotel_name="Lake View", nights=1)],
                cab_details="Sedan",
            )
        )

        assert itineraries.delete_itinerary(TRAVEL_ID)
        assert vouchers.get_voucher(TRAVEL_ID) is None
