"""create airports, flights and bookings tables

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2025-02-03 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            server_onupdate=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "airports",
        sa.Column("airport_id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("location", sa.String(length=150), nullable=False),
        sa.Column("code", sa.String(length=3), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_airports_name_code", "airports", ["name", "code"])
    op.create_index("ix_airports_code", "airports", ["code"])

    op.create_table(
        "flights",
        sa.Column("flight_id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("flight_number", sa.String(length=16), nullable=False),
        sa.Column("departure_datetime", sa.DateTime(), nullable=False),
        sa.Column("arrival_datetime", sa.DateTime(), nullable=False),
        sa.Column(
            "departure_airport_id",
            sa.BigInteger(),
            sa.ForeignKey("airports.airport_id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "arrival_airport_id",
            sa.BigInteger(),
            sa.ForeignKey("airports.airport_id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("duration", sa.String(length=32), nullable=True),
        sa.Column("seats", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("flight_number", name="uq_flights_flight_number"),
    )
    op.create_index(
        "ix_flights_route_departure",
        "flights",
        ["departure_airport_id", "arrival_airport_id", "departure_datetime"],
    )
    op.create_index("ix_flights_departure_datetime", "flights", ["departure_datetime"])

    op.create_table(
        "bookings",
        sa.Column("booking_id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column(
            "flight_id",
            sa.BigInteger(),
            sa.ForeignKey("flights.flight_id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("seats", sa.JSON(), nullable=False),
        sa.Column("billplz_id", sa.String(length=64), nullable=True),
        sa.Column("paid_at", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_bookings_flight_id", "bookings", ["flight_id"])
    op.create_index("ix_bookings_email", "bookings", ["email"])


def downgrade() -> None:
    op.drop_index("ix_bookings_email", table_name="bookings")
    op.drop_index("ix_bookings_flight_id", table_name="bookings")
    op.drop_table("bookings")

    op.drop_index("ix_flights_departure_datetime", table_name="flights")
    op.drop_index("ix_flights_route_departure", table_name="flights")
    op.drop_table("flights")

    op.drop_index("ix_airports_code", table_name="airports")
    op.drop_index("ix_airports_name_code", table_name="airports")
    op.drop_table("airports")
