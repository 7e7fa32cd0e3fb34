from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.types import BIGINT


class Airport(Base):
    __tablename__ = "airports"

    airport_id: Mapped[int] = mapped_column(BIGINT, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    location: Mapped[str] = mapped_column(String(150), nullable=False)
    code: Mapped[str] = mapped_column(String(3), nullable=False)
    created_at: Mapped[datetime | None] = mapped_column(
        sa.TIMESTAMP(timezone=False), server_default=sa.func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        sa.TIMESTAMP(timezone=False), server_default=sa.func.now(), onupdate=sa.func.now()
    )

    # Not unique: the (name, code) pair is checked when airports are written
    __table_args__ = (
        Index("ix_airports_name_code", "name", "code"),
        Index("ix_airports_code", "code"),
    )
