from fastapi import APIRouter, Depends, Query

from app.api.deps import get_booking_service
from app.schemas.booking import BookingCreate, BookingDetail, BookingListResponse, BookingUpdate
from app.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=BookingListResponse)
def list_bookings(
    flight_id: int | None = Query(None),
    service: BookingService = Depends(get_booking_service),
) -> BookingListResponse:
    return service.list_bookings(flight_id)


@router.get("/{booking_id}", response_model=BookingDetail)
def get_booking(booking_id: int, service: BookingService = Depends(get_booking_service)) -> BookingDetail:
    return service.get_booking(booking_id)


@router.post("", response_model=BookingDetail, status_code=201)
def create_booking(payload: BookingCreate, service: BookingService = Depends(get_booking_service)) -> BookingDetail:
    return service.create_booking(payload)


@router.patch("/{booking_id}", response_model=BookingDetail)
def update_booking(
    booking_id: int,
    payload: BookingUpdate,
    service: BookingService = Depends(get_booking_service),
) -> BookingDetail:
    return service.update_booking(booking_id, payload)


@router.delete("/{booking_id}")
def delete_booking(booking_id: int, service: BookingService = Depends(get_booking_service)) -> dict:
    service.delete_booking(booking_id)
    return {"booking_id": booking_id, "deleted": True}
