from __future__ import annotations

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.errors import ErrorKind, RuleViolation
from app.db.models import Airport, Flight
from app.db.repository import RecordRepository
from app.schemas.airport import AirportDetail, AirportListResponse, AirportWrite
from app.services.airport_rules import AirportRuleValidator

logger = logging.getLogger(__name__)


class AirportService:
    def __init__(self, db: Session):
        self.db = db
        self.airports = RecordRepository(db, Airport)
        self.flights = RecordRepository(db, Flight)
        self.rules = AirportRuleValidator(self.airports)

    def list_airports(self) -> AirportListResponse:
        airports = self.airports.find_all(order_by=Airport.airport_id)
        return AirportListResponse(items=[build_airport_detail(airport) for airport in airports])

    def get_airport(self, airport_id: int) -> AirportDetail:
        return build_airport_detail(self._get_airport(airport_id))

    def create_airport(self, payload: AirportWrite) -> AirportDetail:
        candidate = self.rules.validate_create(payload)
        airport = self.airports.insert(**candidate.as_fields())
        logger.info("Airport %s (%s) created (id=%s)", airport.name, airport.code, airport.airport_id)
        return build_airport_detail(airport)

    def update_airport(self, airport_id: int, payload: AirportWrite) -> AirportDetail:
        existing = self._get_airport(airport_id)
        candidate = self.rules.validate_update(existing, payload)
        airport = self.airports.update_by_id(existing.airport_id, **candidate.as_fields())
        if airport is None:
            raise _not_found(airport_id)
        logger.info("Airport %s (%s) updated (id=%s)", airport.name, airport.code, airport.airport_id)
        return build_airport_detail(airport)

    def delete_airport(self, airport_id: int) -> None:
        airport = self._get_airport(airport_id)
        in_use = self.flights.find_one(
            or_(
                Flight.departure_airport_id == airport.airport_id,
                Flight.arrival_airport_id == airport.airport_id,
            )
        )
        if in_use is not None:
            raise RuleViolation(
                ErrorKind.AIRPORT_IN_USE,
                f"{airport.name} ({airport.code}) is still used by flight {in_use.flight_number}!",
            )
        self.airports.delete_by_id(airport.airport_id)
        logger.info("Airport %s (%s) deleted (id=%s)", airport.name, airport.code, airport_id)

    def _get_airport(self, airport_id: int) -> Airport:
        airport = self.airports.find_by_id(airport_id)
        if airport is None:
            raise _not_found(airport_id)
        return airport


def _not_found(airport_id: int) -> RuleViolation:
    return RuleViolation(ErrorKind.NOT_FOUND, f"No such airport with ID: {airport_id} found!")


def build_airport_detail(airport: Airport) -> AirportDetail:
    return AirportDetail(
        airport_id=airport.airport_id,
        name=airport.name,
        location=airport.location,
        code=airport.code,
        created_at=airport.created_at,
        updated_at=airport.updated_at,
    )
