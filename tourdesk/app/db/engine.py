"""Database engine and session factory."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from tourdesk.app.config import Settings, get_settings


def normalize_database_url(database_url: str) -> str:
    """Map async driver URLs onto their sync drivers."""
    if database_url.startswith("sqlite+aiosqlite://"):
        return database_url.replace("sqlite+aiosqlite://", "sqlite://", 1)
    if database_url.startswith("postgresql+asyncpg://"):
        return database_url.replace("postgresql+asyncpg://", "postgresql://", 1)
    return database_url


def require_database_url(settings: Settings) -> str:
    """Return the configured sync database URL.

    Raises:
        ValueError: If DATABASE_URL is unset or empty.
    """
    if not settings.database_url:
        raise ValueError(
            "DATABASE_URL must be set to a valid connection string. "
            "Please configure the database_url setting."
        )
    return normalize_database_url(settings.database_url)


def _set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def enable_sqlite_foreign_keys(engine: Engine) -> Engine:
    """SQLite leaves foreign keys off per connection unless asked."""
    event.listen(engine, "connect", _set_sqlite_pragma)
    return engine


def create_engine_from_settings(settings: Settings) -> Engine:
    """Create SQLAlchemy engine from settings.

    Raises:
        ValueError: If DATABASE_URL is unset or empty.
    """
    database_url = require_database_url(settings)

    if database_url.startswith("sqlite"):
        # FastAPI runs sync routes in a threadpool
        engine = create_engine(
            database_url, connect_args={"check_same_thread": False}, echo=False
        )
        return enable_sqlite_foreign_keys(engine)

    return create_engine(database_url, pool_pre_ping=True, echo=False)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create sessionmaker for creating database sessions.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Sessionmaker bound to the engine
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """Get global engine instance."""
    global _engine
    if _engine is None:
        _engine = create_engine_from_settings(get_settings())
    return _engine


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency for a database session.

    Yields:
        Session instance
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())

    with _session_factory() as session:
        yield session
