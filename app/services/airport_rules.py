from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any

from app.core.errors import ErrorKind, RuleViolation
from app.db.models import Airport
from app.db.repository import RecordRepository
from app.schemas.airport import AirportWrite

# IATA location identifier: exactly three uppercase letters
IATA_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")


def is_valid_code_format(code: str) -> bool:
    return IATA_CODE_PATTERN.fullmatch(code) is not None


@dataclass(slots=True)
class AirportCandidate:
    name: str
    location: str
    code: str

    def as_fields(self) -> dict[str, Any]:
        return asdict(self)


class AirportRuleValidator:
    def __init__(self, airports: RecordRepository[Airport]):
        self.airports = airports

    def validate_create(self, payload: AirportWrite) -> AirportCandidate:
        return self._validate(payload, current_id=None)

    def validate_update(self, existing: Airport, payload: AirportWrite) -> AirportCandidate:
        unchanged = (
            existing.name == payload.name
            and existing.location == payload.location
            and existing.code == payload.code
        )
        if unchanged:
            raise RuleViolation(
                ErrorKind.NO_CHANGE,
                "No changes were made to the airport details that require an update!",
            )
        return self._validate(payload, current_id=existing.airport_id)

    def _validate(self, payload: AirportWrite, current_id: int | None) -> AirportCandidate:
        name = (payload.name or "").strip()
        location = (payload.location or "").strip()
        code = payload.code or ""
        if not name or not location or not code.strip():
            raise RuleViolation(
                ErrorKind.MISSING_FIELDS,
                "The airport's name, location and IATA code is required!",
            )
        if not is_valid_code_format(code):
            raise RuleViolation(
                ErrorKind.INVALID_FORMAT,
                "Invalid IATA code format. Must be exactly 3 uppercase letters (A-Z)!",
            )

        criteria = () if current_id is None else (Airport.airport_id != current_id,)
        if self.airports.find_one(*criteria, name=name, code=code) is not None:
            raise RuleViolation(
                ErrorKind.DUPLICATE_RECORD,
                f"{name} ({code}) has already been added to CashFly!",
            )
        return AirportCandidate(name=name, location=location, code=code)
