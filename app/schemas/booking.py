from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class BookingCreate(BaseModel):
    name: str | None = None
    email: str | None = None
    flight_id: int | None = None
    seats: list[str] = Field(default_factory=list)
    billplz_id: str | None = None
    paid_at: datetime | None = None


class BookingUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    flight_id: int | None = None
    seats: list[str] | None = None
    billplz_id: str | None = None
    paid_at: datetime | None = None


class BookingDetail(BaseModel):
    booking_id: int
    name: str
    email: str
    flight_id: int | None = None
    seats: list[str] = Field(default_factory=list)
    billplz_id: str | None = None
    paid_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BookingListResponse(BaseModel):
    items: list[BookingDetail]
