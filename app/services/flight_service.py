from __future__ import annotations

import logging

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ErrorKind, RuleViolation, StorageError
from app.db.models import Airport, Booking, Flight
from app.db.repository import RecordRepository
from app.schemas.flight import FlightDetail, FlightListResponse, FlightWrite, Seat
from app.services.airport_service import build_airport_detail
from app.services.flight_rules import FlightRuleValidator
from app.services.timestamps import TimestampValidator, from_storage, to_storage

logger = logging.getLogger(__name__)


class FlightService:
    def __init__(self, db: Session, timestamps: TimestampValidator | None = None):
        self.db = db
        self.timestamps = timestamps or TimestampValidator.from_settings()
        self.flights = RecordRepository(db, Flight)
        self.airports = RecordRepository(db, Airport)
        self.rules = FlightRuleValidator(self.flights, self.airports, self.timestamps)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def list_flights(
        self,
        departure_airport_id: int | None = None,
        arrival_airport_id: int | None = None,
        departure_from: str | None = None,
    ) -> FlightListResponse:
        criteria = []
        if departure_airport_id is not None:
            criteria.append(Flight.departure_airport_id == departure_airport_id)
        if arrival_airport_id is not None:
            criteria.append(Flight.arrival_airport_id == arrival_airport_id)
        if departure_from:
            # Everything still to depart on that local calendar day
            start = self.timestamps.parse(departure_from)
            end = self.timestamps.end_of_local_day(start)
            criteria.append(Flight.departure_datetime > to_storage(start))
            criteria.append(Flight.departure_datetime < to_storage(end))

        flights = self.flights.find_all(*criteria, order_by=Flight.departure_datetime)
        return FlightListResponse(items=[self._build_flight_detail(flight) for flight in flights])

    def get_flight(self, flight_id: int) -> FlightDetail:
        return self._build_flight_detail(self._get_flight(flight_id))

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #
    def create_flight(self, payload: FlightWrite) -> FlightDetail:
        candidate = self.rules.validate_create(payload)
        flight = self.flights.insert(**candidate.as_fields())
        logger.info("Flight %s created (id=%s)", flight.flight_number, flight.flight_id)
        return self._build_flight_detail(flight)

    def update_flight(self, flight_id: int, payload: FlightWrite) -> FlightDetail:
        existing = self._get_flight(flight_id)
        candidate = self.rules.validate_update(existing, payload)
        flight = self.flights.update_by_id(existing.flight_id, **candidate.as_fields())
        if flight is None:
            raise self._not_found(flight_id)
        logger.info("Flight %s updated (id=%s)", flight.flight_number, flight.flight_id)
        return self._build_flight_detail(flight)

    def delete_flight(self, flight_id: int) -> None:
        flight = self._get_flight(flight_id)

        # Bookings outlive their flight with the reference cleared
        try:
            self.db.execute(
                update(Booking).where(Booking.flight_id == flight.flight_id).values(flight_id=None)
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Detaching bookings from flight %s failed", flight_id, exc_info=exc)
            raise StorageError() from exc

        self.flights.delete_by_id(flight.flight_id)
        logger.info("Flight %s deleted (id=%s)", flight.flight_number, flight_id)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _get_flight(self, flight_id: int) -> Flight:
        flight = self.flights.find_by_id(flight_id)
        if flight is None:
            raise self._not_found(flight_id)
        return flight

    def _not_found(self, flight_id: int) -> RuleViolation:
        return RuleViolation(ErrorKind.NOT_FOUND, f"No such flight with ID: {flight_id} found!")

    def _build_flight_detail(self, flight: Flight) -> FlightDetail:
        return FlightDetail(
            flight_id=flight.flight_id,
            flight_number=flight.flight_number,
            departure_datetime=from_storage(flight.departure_datetime),
            arrival_datetime=from_storage(flight.arrival_datetime),
            departure_airport=build_airport_detail(flight.departure_airport),
            arrival_airport=build_airport_detail(flight.arrival_airport),
            price=flight.price,
            duration=flight.duration or "",
            seats=[Seat(**seat) for seat in flight.seats or []],
            created_at=flight.created_at,
            updated_at=flight.updated_at,
        )

