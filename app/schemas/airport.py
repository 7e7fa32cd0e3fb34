from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class AirportWrite(BaseModel):
    # Loosely typed on purpose: presence and format are judged by the airport rules
    name: str | None = None
    location: str | None = None
    code: str | None = None


class AirportDetail(BaseModel):
    airport_id: int
    name: str
    location: str
    code: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AirportListResponse(BaseModel):
    items: list[AirportDetail]
