"""SQLAlchemy ORM models for itineraries and vouchers."""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class Itinerary(Base):
    """Itinerary table - one row per trip, unique by travel_id."""

    __tablename__ = "itinerary"
    __table_args__ = (
        Index("idx_itinerary_client_phone", "client_phone"),
        Index("idx_itinerary_created", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    travel_id: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    company: Mapped[str] = mapped_column(Text, nullable=False)
    client_name: Mapped[str] = mapped_column(Text, nullable=False)
    client_phone: Mapped[str] = mapped_column(Text, nullable=False)
    client_email: Mapped[str] = mapped_column(Text, nullable=False, default="")
    package_title: Mapped[str] = mapped_column(Text, nullable=False)
    number_of_days: Mapped[int] = mapped_column(Integer, nullable=False)
    number_of_nights: Mapped[int] = mapped_column(Integer, nullable=False)
    number_of_hotels: Mapped[int] = mapped_column(Integer, nullable=False)
    trip_advisor_name: Mapped[str] = mapped_column(Text, nullable=False)
    trip_advisor_number: Mapped[str] = mapped_column(Text, nullable=False)
    cabs: Mapped[str] = mapped_column(Text, nullable=False)
    flights: Mapped[str] = mapped_column(Text, nullable=False)
    quote_price: Mapped[float] = mapped_column(Float, nullable=False)
    price_per_person: Mapped[float] = mapped_column(Float, nullable=False)
    days: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, nullable=False)
    hotels: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, nullable=False)
    inclusions: Mapped[list[str]] = mapped_column(JSONType, nullable=False)
    exclusions: Mapped[list[str]] = mapped_column(JSONType, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    voucher: Mapped["Voucher | None"] = relationship(
        "Voucher", back_populates="itinerary", cascade="all, delete-orphan", uselist=False
    )


class Voucher(Base):
    """Voucher table - at most one per itinerary."""

    __tablename__ = "voucher"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    travel_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("itinerary.travel_id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    client_name: Mapped[str] = mapped_column(Text, nullable=False)
    adult_no: Mapped[int] = mapped_column(Integer, nullable=False)
    children_no: Mapped[int] = mapped_column(Integer, nullable=False)
    total_nights: Mapped[int] = mapped_column(Integer, nullable=False)
    hotel_stays: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, nullable=False)
    cab_details: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    itinerary: Mapped["Itinerary"] = relationship("Itinerary", back_populates="voucher")
