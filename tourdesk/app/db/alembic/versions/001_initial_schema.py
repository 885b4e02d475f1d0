"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-18

Creates:
- itinerary (unique travel_id)
- voucher (unique travel_id, FK to itinerary.travel_id with cascade delete)
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    """Create itinerary and voucher tables."""
    # itinerary table
    op.create_table(
        "itinerary",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("travel_id", sa.Text(), nullable=False),
        sa.Column("company", sa.Text(), nullable=False),
        sa.Column("client_name", sa.Text(), nullable=False),
        sa.Column("client_phone", sa.Text(), nullable=False),
        sa.Column("client_email", sa.Text(), nullable=False, server_default=""),
        sa.Column("package_title", sa.Text(), nullable=False),
        sa.Column("number_of_days", sa.Integer(), nullable=False),
        sa.Column("number_of_nights", sa.Integer(), nullable=False),
        sa.Column("number_of_hotels", sa.Integer(), nullable=False),
        sa.Column("trip_advisor_name", sa.Text(), nullable=False),
        sa.Column("trip_advisor_number", sa.Text(), nullable=False),
        sa.Column("cabs", sa.Text(), nullable=False),
        sa.Column("flights", sa.Text(), nullable=False),
        sa.Column("quote_price", sa.Float(), nullable=False),
        sa.Column("price_per_person", sa.Float(), nullable=False),
        sa.Column("days", JSONType, nullable=False),
        sa.Column("hotels", JSONType, nullable=False),
        sa.Column("inclusions", JSONType, nullable=False),
        sa.Column("exclusions", JSONType, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("travel_id"),
    )
    op.create_index("idx_itinerary_client_phone", "itinerary", ["client_phone"])
    op.create_index("idx_itinerary_created", "itinerary", ["created_at"])

    # voucher table
    op.create_table(
        "voucher",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("travel_id", sa.Text(), nullable=False),
        sa.Column("client_name", sa.Text(), nullable=False),
        sa.Column("adult_no", sa.Integer(), nullable=False),
        sa.Column("children_no", sa.Integer(), nullable=False),
        sa.Column("total_nights", sa.Integer(), nullable=False),
        sa.Column("hotel_stays", JSONType, nullable=False),
        sa.Column("cab_details", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["travel_id"], ["itinerary.travel_id"], ondelete="CASCADE"),
        sa.UniqueConstraint("travel_id"),
    )


def downgrade() -> None:
    """Drop voucher and itinerary tables."""
    op.drop_table("voucher")
    op.drop_index("idx_itinerary_created", table_name="itinerary")
    op.drop_index("idx_itinerary_client_phone", table_name="itinerary")
    op.drop_table("itinerary")
