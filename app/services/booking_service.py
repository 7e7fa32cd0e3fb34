from __future__ import annotations

import logging

from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError
from sqlalchemy.orm import Session

from app.core.errors import ErrorKind, RuleViolation
from app.db.models import Booking, Flight
from app.db.repository import RecordRepository
from app.schemas.booking import BookingCreate, BookingDetail, BookingListResponse, BookingUpdate
from app.services.timestamps import to_storage

logger = logging.getLogger(__name__)


class BookingService:
    """Stores passenger bookings against flights.

    Seat identifiers are kept as submitted; they are not reconciled with the
    flight's seat map.
    """

    def __init__(self, db: Session):
        self.db = db
        self.bookings = RecordRepository(db, Booking)
        self.flights = RecordRepository(db, Flight)

    def list_bookings(self, flight_id: int | None = None) -> BookingListResponse:
        filters = {} if flight_id is None else {"flight_id": flight_id}
        bookings = self.bookings.find_all(order_by=Booking.booking_id, **filters)
        return BookingListResponse(items=[self._build_booking_detail(booking) for booking in bookings])

    def get_booking(self, booking_id: int) -> BookingDetail:
        return self._build_booking_detail(self._get_booking(booking_id))

    def create_booking(self, payload: BookingCreate) -> BookingDetail:
        name = (payload.name or "").strip()
        email = (payload.email or "").strip()
        seats = [seat.strip() for seat in payload.seats if seat and seat.strip()]
        if not name or not email or not payload.flight_id or not seats:
            raise RuleViolation(
                ErrorKind.MISSING_FIELDS,
                "The passenger's name, email, flight and at least one seat must be provided!",
            )
        self._check_email(email)
        self._get_flight(payload.flight_id)

        booking = self.bookings.insert(
            name=name,
            email=email,
            flight_id=payload.flight_id,
            seats=seats,
            billplz_id=payload.billplz_id,
            paid_at=to_storage(payload.paid_at) if payload.paid_at else None,
        )
        logger.info("Booking %s created for flight %s", booking.booking_id, booking.flight_id)
        return self._build_booking_detail(booking)

    def update_booking(self, booking_id: int, payload: BookingUpdate) -> BookingDetail:
        booking = self._get_booking(booking_id)
        changes = payload.model_dump(exclude_unset=True)

        if "name" in changes:
            changes["name"] = (changes["name"] or "").strip()
            if not changes["name"]:
                raise RuleViolation(ErrorKind.MISSING_FIELDS, "The passenger's name cannot be empty!")
        if "email" in changes:
            changes["email"] = (changes["email"] or "").strip()
            if not changes["email"]:
                raise RuleViolation(ErrorKind.MISSING_FIELDS, "The passenger's email cannot be empty!")
            self._check_email(changes["email"])
        if "seats" in changes:
            changes["seats"] = [seat.strip() for seat in changes["seats"] or [] if seat and seat.strip()]
            if not changes["seats"]:
                raise RuleViolation(ErrorKind.MISSING_FIELDS, "A booking needs at least one seat!")
        if changes.get("paid_at") is not None:
            changes["paid_at"] = to_storage(changes["paid_at"])
        if "flight_id" in changes:
            if not changes["flight_id"]:
                raise RuleViolation(ErrorKind.MISSING_FIELDS, "A booking must reference a flight!")
            self._get_flight(changes["flight_id"])

        if all(getattr(booking, field) == value for field, value in changes.items()):
            raise RuleViolation(
                ErrorKind.NO_CHANGE,
                "No changes were made to the booking details that require an update!",
            )

        updated = self.bookings.update_by_id(booking.booking_id, **changes)
        if updated is None:
            raise _not_found(booking_id)
        logger.info("Booking %s updated", booking_id)
        return self._build_booking_detail(updated)

    def delete_booking(self, booking_id: int) -> None:
        booking = self._get_booking(booking_id)
        self.bookings.delete_by_id(booking.booking_id)
        logger.info("Booking %s deleted", booking_id)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _get_booking(self, booking_id: int) -> Booking:
        booking = self.bookings.find_by_id(booking_id)
        if booking is None:
            raise _not_found(booking_id)
        return booking

    def _get_flight(self, flight_id: int) -> Flight:
        flight = self.flights.find_by_id(flight_id)
        if flight is None:
            raise RuleViolation(ErrorKind.NOT_FOUND, f"No such flight with ID: {flight_id} found!")
        return flight

    def _check_email(self, email: str) -> None:
        try:
            validate_email(email)
        except PydanticCustomError as exc:
            raise RuleViolation(ErrorKind.INVALID_FORMAT, f"'{email}' is not a valid email address!") from exc

    def _build_booking_detail(self, booking: Booking) -> BookingDetail:
        return BookingDetail(
            booking_id=booking.booking_id,
            name=booking.name,
            email=booking.email,
            flight_id=booking.flight_id,
            seats=list(booking.seats or []),
            billplz_id=booking.billplz_id,
            paid_at=booking.paid_at,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


def _not_found(booking_id: int) -> RuleViolation:
    return RuleViolation(ErrorKind.NOT_FOUND, f"No such booking with ID: {booking_id} found!")
