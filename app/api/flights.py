from fastapi import APIRouter, Depends, Query

from app.api.deps import get_flight_service
from app.schemas.flight import FlightDetail, FlightListResponse, FlightWrite
from app.services.flight_service import FlightService

router = APIRouter(prefix="/flights", tags=["flights"])


@router.get("", response_model=FlightListResponse)
def list_flights(
    departure_airport_id: int | None = Query(None),
    arrival_airport_id: int | None = Query(None),
    departure_from: str | None = Query(
        None, description="ISO-8601; returns flights departing after it, up to the end of that local day"
    ),
    service: FlightService = Depends(get_flight_service),
) -> FlightListResponse:
    return service.list_flights(departure_airport_id, arrival_airport_id, departure_from)


@router.get("/{flight_id}", response_model=FlightDetail)
def get_flight(flight_id: int, service: FlightService = Depends(get_flight_service)) -> FlightDetail:
    return service.get_flight(flight_id)


@router.post("", response_model=FlightDetail, status_code=201)
def create_flight(payload: FlightWrite, service: FlightService = Depends(get_flight_service)) -> FlightDetail:
    return service.create_flight(payload)


@router.put("/{flight_id}", response_model=FlightDetail)
def update_flight(
    flight_id: int,
    payload: FlightWrite,
    service: FlightService = Depends(get_flight_service),
) -> FlightDetail:
    return service.update_flight(flight_id, payload)


@router.delete("/{flight_id}")
def delete_flight(flight_id: int, service: FlightService = Depends(get_flight_service)) -> dict:
    service.delete_flight(flight_id)
    return {"flight_id": flight_id, "deleted": True}
