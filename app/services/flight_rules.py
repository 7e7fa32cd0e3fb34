"""Business rules every flight must pass before it is written.

Checks run in a fixed order and stop at the first failure, so a payload with
several problems always reports the same one:

1. all six fields present (price must also be a positive, finite amount)
2. both timestamps parse
3. neither timestamp is in the past, judged in the configured local zone
4. departure and arrival differ
5. departure is not after arrival
6. no other flight with the same (departure, arrival, airports, number) tuple
7. no other flight using the same flight number
8. both airports exist

Updates first compare the payload to the stored flight and fail with
``no_change`` when nothing differs, before any of the checks above.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from app.core.errors import ErrorKind, RuleViolation
from app.db.models import Airport, Flight
from app.db.repository import RecordRepository
from app.schemas.flight import FlightWrite
from app.services.timestamps import (
    TimestampValidator,
    from_storage,
    is_after,
    is_same,
    to_storage,
)


@dataclass(slots=True)
class FlightCandidate:
    departure_datetime: datetime
    arrival_datetime: datetime
    departure_airport_id: int
    arrival_airport_id: int
    flight_number: str
    price: float

    def as_fields(self) -> dict[str, Any]:
        return asdict(self)


class FlightRuleValidator:
    def __init__(
        self,
        flights: RecordRepository[Flight],
        airports: RecordRepository[Airport],
        timestamps: TimestampValidator,
    ):
        self.flights = flights
        self.airports = airports
        self.timestamps = timestamps

    def validate_create(self, payload: FlightWrite) -> FlightCandidate:
        return self._validate(payload, current_id=None)

    def validate_update(self, existing: Flight, payload: FlightWrite) -> FlightCandidate:
        if self._is_unchanged(existing, payload):
            raise RuleViolation(
                ErrorKind.NO_CHANGE,
                "No changes were made to the flight details that require an update!",
            )
        return self._validate(payload, current_id=existing.flight_id)

    def _validate(self, payload: FlightWrite, current_id: int | None) -> FlightCandidate:
        flight_number = (payload.flight_number or "").strip()
        if not (
            payload.departure_datetime
            and payload.arrival_datetime
            and payload.departure_airport_id
            and payload.arrival_airport_id
            and flight_number
            and payload.price
        ):
            raise RuleViolation(
                ErrorKind.MISSING_FIELDS,
                "The flight's departure date & time, arrival date & time, departure & arrival "
                "airport, flight number and price must be provided!",
            )
        if payload.price < 0 or not math.isfinite(payload.price):
            raise RuleViolation(ErrorKind.INVALID_FORMAT, "The flight's price must be a positive amount!")

        departure = self.timestamps.parse(payload.departure_datetime)
        arrival = self.timestamps.parse(payload.arrival_datetime)

        if self.timestamps.is_past(departure) or self.timestamps.is_past(arrival):
            raise RuleViolation(
                ErrorKind.PAST_DATE_TIME,
                "Departure/Arrival date, time or both cannot be in the past!",
            )
        if is_same(departure, arrival):
            raise RuleViolation(
                ErrorKind.ZERO_DURATION,
                "Departure and arrival cannot have the exact same date & time!",
            )
        # Also covers "arrival before departure"
        if is_after(departure, arrival):
            raise RuleViolation(
                ErrorKind.DEPARTURE_AFTER_ARRIVAL,
                "Departure time cannot be after the arrival time!",
            )

        candidate = FlightCandidate(
            departure_datetime=to_storage(departure),
            arrival_datetime=to_storage(arrival),
            departure_airport_id=payload.departure_airport_id,
            arrival_airport_id=payload.arrival_airport_id,
            flight_number=flight_number,
            price=float(payload.price),
        )

        others = self._excluding(current_id)
        duplicate = self.flights.find_one(
            *others,
            departure_datetime=candidate.departure_datetime,
            arrival_datetime=candidate.arrival_datetime,
            departure_airport_id=candidate.departure_airport_id,
            arrival_airport_id=candidate.arrival_airport_id,
            flight_number=candidate.flight_number,
        )
        if duplicate is not None:
            raise RuleViolation(
                ErrorKind.DUPLICATE_RECORD,
                "This exact flight already exists in the database!",
            )
        if self.flights.find_one(*others, flight_number=candidate.flight_number) is not None:
            raise RuleViolation(
                ErrorKind.FLIGHT_NUMBER_IN_USE,
                f"The flight number '{candidate.flight_number}' is already in use. "
                "Please choose another one!",
            )

        for airport_id in (candidate.departure_airport_id, candidate.arrival_airport_id):
            if self.airports.find_by_id(airport_id) is None:
                raise RuleViolation(ErrorKind.NOT_FOUND, f"No such airport with ID: {airport_id} found!")

        return candidate

    def _is_unchanged(self, existing: Flight, payload: FlightWrite) -> bool:
        departure = self.timestamps.try_parse(payload.departure_datetime)
        arrival = self.timestamps.try_parse(payload.arrival_datetime)
        if departure is None or arrival is None:
            return False
        return (
            is_same(departure, from_storage(existing.departure_datetime))
            and is_same(arrival, from_storage(existing.arrival_datetime))
            and payload.departure_airport_id == existing.departure_airport_id
            and payload.arrival_airport_id == existing.arrival_airport_id
            and (payload.flight_number or "").strip() == existing.flight_number
            and payload.price == existing.price
        )

    def _excluding(self, current_id: int | None) -> tuple[Any, ...]:
        if current_id is None:
            return ()
        return (Flight.flight_id != current_id,)
