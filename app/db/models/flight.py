from __future__ import annotations

from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy import JSON, DateTime, ForeignKey, Index, Numeric, String, event, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.models.airport import Airport
from app.db.types import BIGINT
from app.services.flight_derivation import apply_flight_derivations


class Flight(Base):
    __tablename__ = "flights"

    flight_id: Mapped[int] = mapped_column(BIGINT, primary_key=True, autoincrement=True)
    flight_number: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    # Naive UTC
    departure_datetime: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    arrival_datetime: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    departure_airport_id: Mapped[int] = mapped_column(
        BIGINT, ForeignKey("airports.airport_id", ondelete="RESTRICT"), nullable=False
    )
    arrival_airport_id: Mapped[int] = mapped_column(
        BIGINT, ForeignKey("airports.airport_id", ondelete="RESTRICT"), nullable=False
    )
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    duration: Mapped[str | None] = mapped_column(String(32))
    seats: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON)
    created_at: Mapped[datetime | None] = mapped_column(sa.TIMESTAMP, server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(
        sa.TIMESTAMP, server_default=func.now(), onupdate=func.now()
    )

    departure_airport: Mapped[Airport] = relationship(foreign_keys=[departure_airport_id], lazy="joined")
    arrival_airport: Mapped[Airport] = relationship(foreign_keys=[arrival_airport_id], lazy="joined")

    __table_args__ = (
        Index("ix_flights_route_departure", "departure_airport_id", "arrival_airport_id", "departure_datetime"),
        Index("ix_flights_departure_datetime", "departure_datetime"),
    )


@event.listens_for(Flight, "before_insert")
@event.listens_for(Flight, "before_update")
def _derive_flight_fields(mapper, connection, target: Flight) -> None:
    apply_flight_derivations(target)
