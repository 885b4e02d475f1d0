"""Tests for settings and engine configuration."""

import pytest

from tourdesk.app.config import Settings
from sqlalchemy import text

from tourdesk.app.db.engine import (
    create_engine_from_settings,
    normalize_database_url,
    require_database_url,
)


def test_defaults() -> None:
    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.travel_id_max_attempts == 10
    assert settings.travel_id_retry_delay_ms == 100
    assert settings.default_page_size == 20
    assert settings.max_page_size == 100


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test environment variables override defaults."""
    monkeypatch.setenv("TRAVEL_ID_MAX_ATTEMPTS", "3")
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.travel_id_max_attempts == 3
    assert settings.redis_url == "redis://localhost:6379/0"


@pytest.mark.parametrize(
    "url,expected",
    [
        ("sqlite+aiosqlite:///:memory:", "sqlite:///:memory:"),
        ("postgresql+asyncpg://u:p@db/tourdesk", "postgresql://u:p@db/tourdesk"),
        ("postgresql://u:p@db/tourdesk", "postgresql://u:p@db/tourdesk"),
    ],
)
def test_normalize_database_url(url: str, expected: str) -> None:
    assert normalize_database_url(url) == expected


def test_engine_requires_real_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)

    with pytest.raises(ValueError, match="DATABASE_URL"):
        create_engine_from_settings(Settings(_env_file=None))  # type: ignore[call-arg]


def test_engine_for_sqlite() -> None:
    settings = Settings(_env_file=None, database_url="sqlite://")  # type: ignore[call-arg]
    engine = create_engine_from_settings(settings)

    assert engine.dialect.name == "sqlite"
    engine.dispose()


def test_empty_database_url_is_refused() -> None:
    """Test there is no fallback connection string to land on."""
    settings = Settings(_env_file=None, database_url="")  # type: ignore[call-arg]

    assert not hasattr(settings, "postgres_url")
    with pytest.raises(ValueError, match="DATABASE_URL"):
        require_database_url(settings)


def test_sqlite_engine_enforces_foreign_keys() -> None:
    settings = Settings(_env_file=None, database_url="sqlite://")  # type: ignore[call-arg]
    engine = create_engine_from_settings(settings)

    with engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
    engine.dispose()
