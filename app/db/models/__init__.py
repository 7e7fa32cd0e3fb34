from app.db.models.airport import Airport
from app.db.models.booking import Booking
from app.db.models.flight import Flight
from app.db.base import Base

__all__ = [
    "Base",
    "Airport",
    "Flight",
    "Booking",
]
