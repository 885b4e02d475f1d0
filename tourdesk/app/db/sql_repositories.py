"""SQL implementations of repository interfaces."""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tourdesk.app.db.models import Itinerary as ItineraryDB
from tourdesk.app.db.models import Voucher as VoucherDB
from tourdesk.app.db.queries import (
    count_itineraries_by_advisor,
    count_itineraries_by_company,
    count_vouchers_by_prefix,
    query_itineraries,
    query_voucher_figures,
    query_vouchers,
)
from tourdesk.app.errors import DuplicateTravelIdError, ItineraryNotFoundError, VoucherExistsError
from tourdesk.app.models.common import Company
from tourdesk.app.models.dashboard import VoucherTotals
from tourdesk.app.models.itinerary import Itinerary, ItineraryDraft, ItinerarySummary
from tourdesk.app.models.voucher import Voucher, VoucherDraft

logger = logging.getLogger(__name__)

# Columns written on insert and update; travel_id and company are insert-only
_ITINERARY_EDITABLE = (
    "client_name",
    "client_phone",
    "client_email",
    "package_title",
    "number_of_days",
    "number_of_nights",
    "number_of_hotels",
    "trip_advisor_name",
    "trip_advisor_number",
    "cabs",
    "flights",
    "quote_price",
    "price_per_person",
    "days",
    "hotels",
    "inclusions",
    "exclusions",
)

_VOUCHER_EDITABLE = (
    "client_name",
    "adult_no",
    "children_no",
    "total_nights",
    "hotel_stays",
    "cab_details",
)


def _to_itinerary(row: ItineraryDB) -> Itinerary:
    return Itinerary(
        travel_id=row.travel_id,
        company=row.company,
        created_at=row.created_at,
        updated_at=row.updated_at,
        **{column: getattr(row, column) for column in _ITINERARY_EDITABLE},
    )


def _itinerary_exists(session: Session, travel_id: str) -> bool:
    return (
        session.query(ItineraryDB.id).filter(ItineraryDB.travel_id == travel_id).first()
        is not None
    )


def _to_voucher(row: VoucherDB) -> Voucher:
    return Voucher(
        travel_id=row.travel_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        **{column: getattr(row, column) for column in _VOUCHER_EDITABLE},
    )


class SqlItineraryRepository:
    """SQL implementation of ItineraryRepository."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def exists(self, travel_id: str) -> bool:
        """Check whether a travel ID is taken."""
        return _itinerary_exists(self._session, travel_id)

    def add_itinerary(self, draft: ItineraryDraft) -> Itinerary:
        """Persist a new itinerary."""
        if draft.travel_id is None:
            raise ValueError("travel_id must be allocated before persisting")

        data = draft.model_dump(mode="json")
        now = datetime.now()

        itin = ItineraryDB(
            travel_id=draft.travel_id,
            company=draft.company.value,
            created_at=now,
            updated_at=now,
            **{column: data[column] for column in _ITINERARY_EDITABLE},
        )

        self._session.add(itin)
        try:
            self._session.commit()
        except IntegrityError as e:
            # travel_id unique constraint is the only one on this table
            self._session.rollback()
            logger.warning(f"Rejected duplicate travel_id={draft.travel_id}")
            raise DuplicateTravelIdError(draft.travel_id) from e

        return _to_itinerary(itin)

    def get_itinerary(self, travel_id: str) -> Itinerary | None:
        """Get itinerary by travel ID."""
        itin = self._session.query(ItineraryDB).filter(ItineraryDB.travel_id == travel_id).first()

        if itin is None:
            return None

        return _to_itinerary(itin)

    def find_by_client_phone(self, client_phone: str) -> Itinerary | None:
        """Get the itinerary using a client phone number."""
        itin = (
            self._session.query(ItineraryDB)
            .filter(ItineraryDB.client_phone == client_phone)
            .first()
        )

        if itin is None:
            return None

        return _to_itinerary(itin)

    def list_itineraries(
        self,
        *,
        search: str | None = None,
        company: Company | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[ItinerarySummary]:
        """List itineraries, newest first."""
        itins = query_itineraries(self._session, search, company).offset(offset).limit(limit).all()

        return [
            ItinerarySummary(
                travel_id=itin.travel_id,
                company=itin.company,
                client_name=itin.client_name,
                client_phone=itin.client_phone,
                client_email=itin.client_email,
                package_title=itin.package_title,
                created_at=itin.created_at,
            )
            for itin in itins
        ]

    def update_itinerary(self, travel_id: str, draft: ItineraryDraft) -> Itinerary | None:
        """Overwrite the editable fields of a stored itinerary."""
        itin = self._session.query(ItineraryDB).filter(ItineraryDB.travel_id == travel_id).first()

        if itin is None:
            return None

        data = draft.model_dump(mode="json")
        for column in _ITINERARY_EDITABLE:
            setattr(itin, column, data[column])
        itin.updated_at = datetime.now()

        self._session.commit()

        return _to_itinerary(itin)

    def delete_itinerary(self, travel_id: str) -> bool:
        """Delete an itinerary and, through the relationship cascade, its voucher."""
        itin = self._session.query(ItineraryDB).filter(ItineraryDB.travel_id == travel_id).first()

        if itin is None:
            return False

        self._session.delete(itin)
        self._session.commit()
        return True


class SqlVoucherRepository:
    """SQL implementation of VoucherRepository."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def add_voucher(self, draft: VoucherDraft) -> Voucher:
        """Persist a new voucher."""
        data = draft.model_dump(mode="json")
        now = datetime.now()

        voucher = VoucherDB(
            travel_id=draft.travel_id,
            created_at=now,
            updated_at=now,
            **{column: data[column] for column in _VOUCHER_EDITABLE},
        )

        self._session.add(voucher)
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            # Unique travel_id and the itinerary foreign key both land here
            if self.get_voucher(draft.travel_id) is not None:
                raise VoucherExistsError(draft.travel_id) from e
            if not _itinerary_exists(self._session, draft.travel_id):
                raise ItineraryNotFoundError(draft.travel_id) from e
            raise

        return _to_voucher(voucher)

    def get_voucher(self, travel_id: str) -> Voucher | None:
        """Get voucher by travel ID."""
        voucher = self._session.query(VoucherDB).filter(VoucherDB.travel_id == travel_id).first()

        if voucher is None:
            return None

        return _to_voucher(voucher)

    def list_vouchers(
        self,
        *,
        search: str | None = None,
        company: Company | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Voucher]:
        """List vouchers, newest first."""
        vouchers = query_vouchers(self._session, search, company).offset(offset).limit(limit).all()
        return [_to_voucher(voucher) for voucher in vouchers]

    def update_voucher(self, travel_id: str, draft: VoucherDraft) -> Voucher | None:
        """Overwrite a stored voucher."""
        voucher = self._session.query(VoucherDB).filter(VoucherDB.travel_id == travel_id).first()

        if voucher is None:
            return None

        data = draft.model_dump(mode="json")
        for column in _VOUCHER_EDITABLE:
            setattr(voucher, column, data[column])
        voucher.updated_at = datetime.now()

        self._session.commit()

        return _to_voucher(voucher)

    def delete_voucher(self, travel_id: str) -> bool:
        """Delete a voucher."""
        voucher = self._session.query(VoucherDB).filter(VoucherDB.travel_id == travel_id).first()

        if voucher is None:
            return False

        self._session.delete(voucher)
        self._session.commit()
        return True


class SqlDashboardRepository:
    """SQL implementation of DashboardRepository."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def count_itineraries_by_company(
        self, date_from: datetime | None = None, date_to: datetime | None = None
    ) -> dict[Company, int]:
        return count_itineraries_by_company(self._session, date_from, date_to)

    def count_itineraries_by_advisor(
        self,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        limit: int = 10,
    ) -> list[tuple[str, int]]:
        return count_itineraries_by_advisor(self._session, date_from, date_to, limit)

    def count_vouchers_by_company(
        self, date_from: datetime | None = None, date_to: datetime | None = None
    ) -> dict[Company, int]:
        counts: dict[Company, int] = {}
        for prefix, count in count_vouchers_by_prefix(self._session, date_from, date_to).items():
            company = Company.from_travel_id(prefix)
            if company is not None:
                counts[company] = counts.get(company, 0) + count
        return counts

    def voucher_totals(
        self, date_from: datetime | None = None, date_to: datetime | None = None
    ) -> VoucherTotals:
        """Sum nights and guests; hotel stays live in a JSON column so they are counted here."""
        totals = VoucherTotals()
        for hotel_stays, total_nights, adult_no, children_no in query_voucher_figures(
            self._session, date_from, date_to
        ):
            totals.vouchers += 1
            totals.with_hotels += 1 if hotel_stays else 0
            totals.nights += total_nights
            totals.guests += adult_no + children_no
        return totals
