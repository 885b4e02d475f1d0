"""Filtered and aggregate query helpers shared by the SQL repositories."""

from datetime import datetime
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from tourdesk.app.db.models import Itinerary, Voucher
from tourdesk.app.models.common import Company

LIKE_ESCAPE = "\\"


def _like(term: str) -> str:
    """Substring pattern for term with LIKE wildcards matched literally."""
    escaped = (
        term.lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


def _created_between(
    query: Query, model: Any, date_from: datetime | None, date_to: datetime | None
) -> Query:
    if date_from is not None:
        query = query.filter(model.created_at >= date_from)
    if date_to is not None:
        query = query.filter(model.created_at <= date_to)
    return query


# Travel ID prefix (TRL, TTH) identifies the company a voucher was issued under
VOUCHER_PREFIX = func.substr(Voucher.travel_id, 1, 3)


def query_itineraries(
    session: Session, search: str | None = None, company: Company | None = None
) -> Query:
    """Query itinerary table, newest first, with optional search and company filter.

    Args:
        session: SQLAlchemy session
        search: Case-insensitive substring of travel_id, client_name or package_title
        company: Restrict to one company

    Returns:
        Ordered query
    """
    query = session.query(Itinerary)

    if search:
        pattern = _like(search)
        query = query.filter(
            or_(
                func.lower(Itinerary.travel_id).like(pattern, escape=LIKE_ESCAPE),
                func.lower(Itinerary.client_name).like(pattern, escape=LIKE_ESCAPE),
                func.lower(Itinerary.package_title).like(pattern, escape=LIKE_ESCAPE),
            )
        )

    if company is not None:
        query = query.filter(Itinerary.company == company.value)

    return query.order_by(Itinerary.created_at.desc(), Itinerary.travel_id.desc())


def query_vouchers(
    session: Session, search: str | None = None, company: Company | None = None
) -> Query:
    """Query voucher table, newest first.

    Vouchers belong to a company through their travel ID prefix.
    """
    query = session.query(Voucher)

    if search:
        pattern = _like(search)
        query = query.filter(
            or_(
                func.lower(Voucher.travel_id).like(pattern, escape=LIKE_ESCAPE),
                func.lower(Voucher.client_name).like(pattern, escape=LIKE_ESCAPE),
            )
        )

    if company is not None:
        query = query.filter(VOUCHER_PREFIX == company.prefix)

    return query.order_by(Voucher.created_at.desc(), Voucher.travel_id.desc())


def count_itineraries_by_company(
    session: Session, date_from: datetime | None = None, date_to: datetime | None = None
) -> dict[Company, int]:
    query = session.query(Itinerary.company, func.count(Itinerary.id)).group_by(Itinerary.company)
    rows = _created_between(query, Itinerary, date_from, date_to).all()
    return {Company(company): count for company, count in rows}


def count_itineraries_by_advisor(
    session: Session,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    limit: int = 10,
) -> list[tuple[str, int]]:
    """Trip advisors with the most itineraries, blank names excluded."""
    count = func.count(Itinerary.id)
    query = (
        session.query(Itinerary.trip_advisor_name, count)
        .filter(func.trim(Itinerary.trip_advisor_name) != "")
        .group_by(Itinerary.trip_advisor_name)
    )
    rows = (
        _created_between(query, Itinerary, date_from, date_to)
        .order_by(count.desc(), Itinerary.trip_advisor_name)
        .limit(limit)
        .all()
    )
    return [(name, n) for name, n in rows]


def count_vouchers_by_prefix(
    session: Session, date_from: datetime | None = None, date_to: datetime | None = None
) -> dict[str, int]:
    query = session.query(VOUCHER_PREFIX, func.count(Voucher.id)).group_by(VOUCHER_PREFIX)
    rows = _created_between(query, Voucher, date_from, date_to).all()
    return {p: n for p, n in rows}


def query_voucher_figures(
    session: Session, date_from: datetime | None = None, date_to: datetime | None = None
) -> Query:
    """Per-voucher hotel stays, nights and guest numbers for totals."""
    query = session.query(
        Voucher.hotel_stays, Voucher.total_nights, Voucher.adult_no, Voucher.children_no
    )
    return _created_between(query, Voucher, date_from, date_to)
