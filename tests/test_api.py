from __future__ import annotations

import asyncio
import json
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.airports import create_airport, delete_airport, list_airports
from app.api.bookings import create_booking, list_bookings
from app.api.deps import get_timestamp_validator
from app.api.flights import create_flight, get_flight, list_flights
from app.api.public.health import healthz
from app.core.errors import ErrorKind, RuleViolation, StorageError
from app.db.base import Base
from app.db.session import get_db
from app.main import app, handle_rule_violation, handle_storage_error
from app.schemas.airport import AirportWrite
from app.schemas.booking import BookingCreate
from app.schemas.flight import FlightWrite
from app.services.airport_service import AirportService
from app.services.booking_service import BookingService
from app.services.flight_service import FlightService
from app.services.timestamps import TimestampValidator


@pytest.fixture()
def db_session() -> Session:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, future=True)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


def _flight_service(db: Session) -> FlightService:
    timestamps = TimestampValidator(
        zone=ZoneInfo("Asia/Kuala_Lumpur"),
        clock=lambda: datetime(2029, 12, 31, 16, 0, tzinfo=UTC),
    )
    return FlightService(db, timestamps)


def test_routes_are_registered() -> None:
    paths = set(app.openapi()["paths"])
    assert {
        "/healthz",
        "/airports",
        "/airports/{airport_id}",
        "/flights",
        "/flights/{flight_id}",
        "/bookings",
        "/bookings/{booking_id}",
    } <= paths


def test_healthz_reports_database(db_session: Session) -> None:
    assert healthz(db=db_session) == {"status": "ok", "database": True}


def test_airport_flight_booking_flow(db_session: Session) -> None:
    airports = AirportService(db_session)
    kul = create_airport(
        payload=AirportWrite(name="Kuala Lumpur International Airport", location="Sepang", code="KUL"),
        service=airports,
    )
    pen = create_airport(
        payload=AirportWrite(name="Penang International Airport", location="Bayan Lepas", code="PEN"),
        service=airports,
    )
    assert len(list_airports(service=airports).items) == 2

    flights = _flight_service(db_session)
    flight = create_flight(
        payload=FlightWrite(
            departure_datetime="2030-01-01T08:00:00Z",
            arrival_datetime="2030-01-01T10:30:00Z",
            departure_airport_id=kul.airport_id,
            arrival_airport_id=pen.airport_id,
            flight_number="CF101",
            price=199.0,
        ),
        service=flights,
    )
    assert flight.duration == "2 Hrs 30 Mins"
    assert len(flight.seats) == 20
    assert get_flight(flight.flight_id, service=flights).flight_number == "CF101"

    listed = list_flights(
        departure_airport_id=kul.airport_id,
        arrival_airport_id=pen.airport_id,
        departure_from="2030-01-01T00:00:00+08:00",
        service=flights,
    )
    assert [item.flight_id for item in listed.items] == [flight.flight_id]

    bookings = BookingService(db_session)
    booking = create_booking(
        payload=BookingCreate(name="Wei Ling", email="weiling@example.com", flight_id=flight.flight_id, seats=["2C"]),
        service=bookings,
    )
    assert list_bookings(flight_id=flight.flight_id, service=bookings).items[0].booking_id == booking.booking_id

    with pytest.raises(RuleViolation) as exc:
        delete_airport(kul.airport_id, service=airports)
    assert exc.value.kind is ErrorKind.AIRPORT_IN_USE


def test_rule_violation_handler_maps_kind_to_status() -> None:
    response = asyncio.run(
        handle_rule_violation(None, RuleViolation(ErrorKind.FLIGHT_NUMBER_IN_USE, "taken"))
    )
    assert response.status_code == 409
    assert json.loads(response.body) == {"detail": "flight_number_in_use", "message": "taken"}

    response = asyncio.run(handle_rule_violation(None, RuleViolation(ErrorKind.ZERO_DURATION)))
    assert response.status_code == 400
    assert json.loads(response.body)["detail"] == "zero_duration"

    response = asyncio.run(handle_rule_violation(None, RuleViolation(ErrorKind.NOT_FOUND)))
    assert response.status_code == 404


def test_storage_error_handler_hides_details() -> None:
    response = asyncio.run(handle_storage_error(None, StorageError()))
    assert response.status_code == 500
    assert json.loads(response.body) == {"detail": "internal_error"}


@pytest.fixture()
def client(db_session: Session):
    def _override_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_timestamp_validator] = lambda: TimestampValidator(
        zone=ZoneInfo("Asia/Kuala_Lumpur"),
        clock=lambda: datetime(2029, 12, 31, 16, 0, tzinfo=UTC),
    )
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_http_round_trip(client: TestClient) -> None:
    kul = client.post("/airports", json={"name": "Kuala Lumpur International Airport", "location": "Sepang", "code": "KUL"})
    pen = client.post("/airports", json={"name": "Penang International Airport", "location": "Bayan Lepas", "code": "PEN"})
    assert kul.status_code == 201 and pen.status_code == 201

    flight = {
        "departure_datetime": "2030-01-01T08:00:00Z",
        "arrival_datetime": "2030-01-01T08:00:00Z",
        "departure_airport_id": kul.json()["airport_id"],
        "arrival_airport_id": pen.json()["airport_id"],
        "flight_number": "CF101",
        "price": 199.0,
    }
    response = client.post("/flights", json=flight)
    assert response.status_code == 400
    assert response.json()["detail"] == "zero_duration"

    flight["arrival_datetime"] = "2030-01-01T10:30:00Z"
    response = client.post("/flights", json=flight)
    assert response.status_code == 201
    assert response.json()["duration"] == "2 Hrs 30 Mins"
    flight_id = response.json()["flight_id"]

    response = client.post("/flights", json={**flight, "departure_datetime": "2030-01-01T09:00:00Z"})
    assert response.status_code == 409
    assert response.json()["detail"] == "flight_number_in_use"

    assert client.get(f"/flights/{flight_id}").json()["flight_number"] == "CF101"
    response = client.get("/flights/9999")
    assert response.status_code == 404
    assert response.json()["detail"] == "not_found"

    response = client.post(
        "/bookings",
        json={"name": "Wei Ling", "email": "weiling@example..com", "flight_id": flight_id, "seats": ["2C"]},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "invalid_format"

    response = client.delete(f"/airports/{kul.json()['airport_id']}")
    assert response.status_code == 409
    assert response.json()["detail"] == "airport_in_use"

    assert client.delete(f"/flights/{flight_id}").json() == {"flight_id": flight_id, "deleted": True}
