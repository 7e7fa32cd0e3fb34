from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.airport import AirportDetail


class FlightWrite(BaseModel):
    departure_datetime: str | None = Field(None, description="ISO-8601, e.g. 2030-01-01T08:00:00Z")
    arrival_datetime: str | None = Field(None, description="ISO-8601, e.g. 2030-01-01T10:30:00Z")
    departure_airport_id: int | None = None
    arrival_airport_id: int | None = None
    flight_number: str | None = None
    price: float | None = None


class Seat(BaseModel):
    seat_number: str
    is_booked: bool = False


class FlightDetail(BaseModel):
    flight_id: int
    flight_number: str
    departure_datetime: datetime
    arrival_datetime: datetime
    departure_airport: AirportDetail
    arrival_airport: AirportDetail
    price: float
    duration: str
    seats: list[Seat] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FlightListResponse(BaseModel):
    items: list[FlightDetail]
