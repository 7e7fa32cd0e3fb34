from fastapi import APIRouter, Depends

from app.api.deps import get_airport_service
from app.schemas.airport import AirportDetail, AirportListResponse, AirportWrite
from app.services.airport_service import AirportService

router = APIRouter(prefix="/airports", tags=["airports"])


@router.get("", response_model=AirportListResponse)
def list_airports(service: AirportService = Depends(get_airport_service)) -> AirportListResponse:
    return service.list_airports()


@router.get("/{airport_id}", response_model=AirportDetail)
def get_airport(airport_id: int, service: AirportService = Depends(get_airport_service)) -> AirportDetail:
    return service.get_airport(airport_id)


@router.post("", response_model=AirportDetail, status_code=201)
def create_airport(payload: AirportWrite, service: AirportService = Depends(get_airport_service)) -> AirportDetail:
    return service.create_airport(payload)


@router.put("/{airport_id}", response_model=AirportDetail)
def update_airport(
    airport_id: int,
    payload: AirportWrite,
    service: AirportService = Depends(get_airport_service),
) -> AirportDetail:
    return service.update_airport(airport_id, payload)


@router.delete("/{airport_id}")
def delete_airport(airport_id: int, service: AirportService = Depends(get_airport_service)) -> dict:
    service.delete_airport(airport_id)
    return {"airport_id": airport_id, "deleted": True}
