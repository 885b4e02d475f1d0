"""Shared pytest fixtures for all test suites."""

import os
import random
from collections.abc import Callable, Generator
from datetime import datetime
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool, StaticPool

from tourdesk.app.api.deps import (
    enforce_rate_limit,
    get_dashboard_repository,
    get_itinerary_repository,
    get_voucher_repository,
)
from tourdesk.app.db.engine import enable_sqlite_foreign_keys, normalize_database_url
from tourdesk.app.db.inmemory import (
    InMemoryDashboardRepository,
    InMemoryItineraryRepository,
    InMemoryVoucherRepository,
)
from tourdesk.app.db.models import Base
from tourdesk.app.main import app
from tourdesk.app.models.itinerary import ItineraryDraft
from tourdesk.app.services.travel_id import TravelIdGenerator

FIXED_NOW = datetime(2026, 4, 18, 14, 30)


def itinerary_payload(**overrides: Any) -> dict[str, Any]:
    """Valid create-itinerary body with two days and one hotel."""
    payload: dict[str, Any] = {
        "company": "TOURILLO",
        "client_name": "Asha Verma",
        "client_phone": "9876500001",
        "client_email": "asha@example.com",
        "package_title": "Kashmir Getaway",
        "number_of_days": 2,
        "number_of_nights": 1,
        "number_of_hotels": 1,
        "trip_advisor_name": "Ravi",
        "trip_advisor_number": "9625992025",
        "cabs": "4 Seater - Sedan (Dzire / Aura / Baleno or similar)",
        "flights": "DEL-SXR 6E-211",
        "quote_price": 42000,
        "price_per_person": 21000,
        "days": [
            {"day_number": 1, "summary": "Arrive in Srinagar", "description": "Shikara ride"},
            {"day_number": 2, "summary": "Departure", "description": "Transfer to airport"},
        ],
        "hotels": [
            {
                "place_name": "Srinagar",
                "place_description": "Summer capital",
                "hotel_name": "Lake View",
                "room_type": "Deluxe",
                "hotel_description": "Overlooks Dal Lake",
            }
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def payload() -> Callable[..., dict[str, Any]]:
    """Factory for create-itinerary request bodies."""
    return itinerary_payload


@pytest.fixture
def make_draft() -> Callable[..., ItineraryDraft]:
    """Factory for valid itinerary drafts."""

    def _make(**overrides: Any) -> ItineraryDraft:
        return ItineraryDraft.model_validate(itinerary_payload(**overrides))

    return _make


@pytest.fixture
def voucher_repo() -> InMemoryVoucherRepository:
    return InMemoryVoucherRepository()


@pytest.fixture
def itinerary_repo(voucher_repo: InMemoryVoucherRepository) -> InMemoryItineraryRepository:
    """Itinerary repo whose deletes cascade to voucher_repo."""
    return InMemoryItineraryRepository(voucher_repo)


@pytest.fixture
def dashboard_repo(
    itinerary_repo: InMemoryItineraryRepository, voucher_repo: InMemoryVoucherRepository
) -> InMemoryDashboardRepository:
    return InMemoryDashboardRepository(itinerary_repo, voucher_repo)


@pytest.fixture
def sleeps() -> list[float]:
    """Records every delay the generator asked for."""
    return []


@pytest.fixture
def generator(itinerary_repo: InMemoryItineraryRepository, sleeps: list[float]) -> TravelIdGenerator:
    """Generator over the in-memory repo with a fixed clock and no real sleeping."""
    return TravelIdGenerator(
        itinerary_repo,
        clock=lambda: FIXED_NOW,
        rng=random.Random(7),
        sleep=sleeps.append,
    )


@pytest.fixture
def client(
    itinerary_repo: InMemoryItineraryRepository,
    voucher_repo: InMemoryVoucherRepository,
    dashboard_repo: InMemoryDashboardRepository,
) -> Generator[TestClient, None, None]:
    """Test client backed by in-memory repositories with rate limiting off."""
    app.dependency_overrides[get_itinerary_repository] = lambda: itinerary_repo
    app.dependency_overrides[get_voucher_repository] = lambda: voucher_repo
    app.dependency_overrides[get_dashboard_repository] = lambda: dashboard_repo
    app.dependency_overrides[enforce_rate_limit] = lambda: None

    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sql_session() -> Generator[Session, None, None]:
    """Session on a fresh in-memory SQLite database with foreign keys enforced."""
    engine = enable_sqlite_foreign_keys(
        create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(engine)

    with Session(engine, expire_on_commit=False) as session:
        yield session

    engine.dispose()


@pytest.fixture
def postgres_engine() -> Generator[Engine, None, None]:
    """Create engine for PostgreSQL integration tests.

    Requires DATABASE_URL to be set to a real PostgreSQL connection string.
    Tests using this fixture should be marked with @pytest.mark.postgres.
    """
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set - skipping postgres test")

    database_url = normalize_database_url(database_url)
    if not database_url.startswith("postgresql"):
        pytest.skip(f"DATABASE_URL is not PostgreSQL: {database_url}")

    engine = create_engine(database_url, poolclass=NullPool)
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()
