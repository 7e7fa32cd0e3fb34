from fastapi import APIRouter

from app.api.airports import router as airports_router
from app.api.bookings import router as bookings_router
from app.api.flights import router as flights_router
from app.api.public.health import router as health_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(airports_router)
api_router.include_router(flights_router)
api_router.include_router(bookings_router)
