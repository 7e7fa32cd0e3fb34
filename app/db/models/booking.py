from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.models.flight import Flight
from app.db.types import BIGINT


class Booking(Base):
    __tablename__ = "bookings"

    booking_id: Mapped[int] = mapped_column(BIGINT, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    flight_id: Mapped[int | None] = mapped_column(
        BIGINT, ForeignKey("flights.flight_id", ondelete="SET NULL")
    )
    seats: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    billplz_id: Mapped[str | None] = mapped_column(String(64))
    paid_at: Mapped[datetime | None] = mapped_column(DateTime)
    created_at: Mapped[datetime | None] = mapped_column(sa.TIMESTAMP, server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(
        sa.TIMESTAMP, server_default=func.now(), onupdate=func.now()
    )

    flight: Mapped[Flight | None] = relationship()

    __table_args__ = (
        Index("ix_bookings_flight_id", "flight_id"),
        Index("ix_bookings_email", "email"),
    )
