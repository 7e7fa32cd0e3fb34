from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.airport_service import AirportService
from app.services.booking_service import BookingService
from app.services.flight_service import FlightService
from app.services.timestamps import TimestampValidator


def get_timestamp_validator() -> TimestampValidator:
    return TimestampValidator.from_settings()


def get_airport_service(db: Session = Depends(get_db)) -> AirportService:
    return AirportService(db)


def get_flight_service(
    db: Session = Depends(get_db),
    timestamps: TimestampValidator = Depends(get_timestamp_validator),
) -> FlightService:
    return FlightService(db, timestamps)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)
