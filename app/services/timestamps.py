from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Callable
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.core.errors import ErrorKind, RuleViolation

INVALID_TIMESTAMP_MESSAGE = (
    "Invalid date-time format. Please select valid departure & arrival date-time!"
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def is_before(a: datetime, b: datetime) -> bool:
    return a < b


def is_same(a: datetime, b: datetime) -> bool:
    return a == b


def is_after(a: datetime, b: datetime) -> bool:
    return a > b


def to_storage(instant: datetime) -> datetime:
    """Aware instant -> naive UTC, the form the flights table keeps."""
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(UTC).replace(tzinfo=None)


def from_storage(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(slots=True)
class TimestampValidator:
    """Parses flight timestamps and answers "is this in the past" for one civil zone.

    Naive input strings are read as wall-clock time in ``zone``. Everything
    returned is an aware UTC datetime.
    """

    zone: ZoneInfo
    clock: Callable[[], datetime] = field(default=_utcnow)

    @classmethod
    def from_settings(cls, clock: Callable[[], datetime] | None = None) -> "TimestampValidator":
        return cls(zone=ZoneInfo(settings.local_timezone), clock=clock or _utcnow)

    def parse(self, raw: str | datetime | None) -> datetime:
        if isinstance(raw, datetime):
            value = raw
        elif isinstance(raw, str) and raw.strip():
            try:
                value = datetime.fromisoformat(raw.strip())
            except ValueError as exc:
                raise RuleViolation(ErrorKind.INVALID_TIMESTAMP, INVALID_TIMESTAMP_MESSAGE) from exc
        else:
            raise RuleViolation(ErrorKind.INVALID_TIMESTAMP, INVALID_TIMESTAMP_MESSAGE)

        if value.tzinfo is None:
            value = value.replace(tzinfo=self.zone)
        return value.astimezone(UTC)

    def try_parse(self, raw: str | datetime | None) -> datetime | None:
        try:
            return self.parse(raw)
        except RuleViolation:
            return None

    def now(self) -> datetime:
        return self.clock().astimezone(self.zone)

    def to_local(self, instant: datetime) -> datetime:
        return instant.astimezone(self.zone)

    def is_past(self, instant: datetime) -> bool:
        return is_before(self.to_local(instant), self.now())

    def end_of_local_day(self, instant: datetime) -> datetime:
        local = self.to_local(instant)
        midnight = datetime(local.year, local.month, local.day, tzinfo=self.zone)
        return (midnight + timedelta(days=1)).astimezone(UTC)
