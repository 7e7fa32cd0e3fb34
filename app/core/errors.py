from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    MISSING_FIELDS = "missing_fields"
    INVALID_FORMAT = "invalid_format"
    INVALID_TIMESTAMP = "invalid_timestamp"
    PAST_DATE_TIME = "past_date_time"
    ZERO_DURATION = "zero_duration"
    DEPARTURE_AFTER_ARRIVAL = "departure_after_arrival"
    DUPLICATE_RECORD = "duplicate_record"
    FLIGHT_NUMBER_IN_USE = "flight_number_in_use"
    NO_CHANGE = "no_change"
    NOT_FOUND = "not_found"
    AIRPORT_IN_USE = "airport_in_use"


_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE_RECORD: 409,
    ErrorKind.FLIGHT_NUMBER_IN_USE: 409,
    ErrorKind.AIRPORT_IN_USE: 409,
}


class RuleViolation(Exception):
    """Raised when a request breaks one of the airport, flight or booking rules."""

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or kind.value
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.kind.value

    @property
    def status_code(self) -> int:
        return _STATUS_CODES.get(self.kind, 400)


class StorageError(Exception):
    """Raised when the database fails underneath a service call."""

    def __init__(self, code: str = "storage_failure") -> None:
        super().__init__(code)
        self.code = code
        self.status_code = 500
