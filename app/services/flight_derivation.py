"""Fields a flight derives from its own schedule on every save.

``duration`` follows the departure/arrival instants and is rewritten each
time the row is inserted or updated. ``seats`` is laid out once, the first
time the flight is saved with an empty seat list, and is left alone after
that so booked flags survive later edits.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

SEAT_ROWS = 5
SEAT_COLUMNS = ("A", "B", "C", "D")


class _FlightLike(Protocol):
    departure_datetime: datetime
    arrival_datetime: datetime
    duration: str | None
    seats: list[dict[str, Any]] | None


def derive_duration(departure: datetime, arrival: datetime) -> str:
    total_minutes = int((arrival - departure).total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours} Hrs {minutes} Mins"


def generate_seat_layout() -> list[dict[str, Any]]:
    return [
        {"seat_number": f"{row}{column}", "is_booked": False}
        for row in range(1, SEAT_ROWS + 1)
        for column in SEAT_COLUMNS
    ]


def ensure_seat_layout(seats: list[dict[str, Any]] | None) -> list[dict[str, Any]]:
    if seats:
        return seats
    return generate_seat_layout()


def apply_flight_derivations(flight: _FlightLike) -> None:
    if flight.departure_datetime is None or flight.arrival_datetime is None:
        raise ValueError("flight is missing departure_datetime or arrival_datetime")
    flight.duration = derive_duration(flight.departure_datetime, flight.arrival_datetime)
    seats = ensure_seat_layout(flight.seats)
    if seats is not flight.seats:
        flight.seats = seats
