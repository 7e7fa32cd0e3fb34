from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from app.core.errors import ErrorKind, RuleViolation
from app.services.timestamps import (
    TimestampValidator,
    from_storage,
    is_after,
    is_before,
    is_same,
    to_storage,
)

MYT = ZoneInfo("Asia/Kuala_Lumpur")


@pytest.fixture()
def validator() -> TimestampValidator:
    # 2030-01-01 00:00 in Kuala Lumpur
    return TimestampValidator(zone=MYT, clock=lambda: datetime(2029, 12, 31, 16, 0, tzinfo=UTC))


def test_parse_accepts_zulu_and_offsets(validator: TimestampValidator) -> None:
    zulu = validator.parse("2030-01-01T08:00:00Z")
    offset = validator.parse("2030-01-01T16:00:00+08:00")

    assert zulu == datetime(2030, 1, 1, 8, 0, tzinfo=UTC)
    assert is_same(zulu, offset)
    assert zulu.tzinfo == UTC


def test_parse_reads_naive_strings_as_local_wall_clock(validator: TimestampValidator) -> None:
    assert validator.parse("2030-01-01T10:00:00") == datetime(2030, 1, 1, 2, 0, tzinfo=UTC)


@pytest.mark.parametrize("raw", ["", "   ", None, "not-a-date", "2030-13-45T99:00:00Z"])
def test_parse_rejects_garbage(validator: TimestampValidator, raw) -> None:
    with pytest.raises(RuleViolation) as exc:
        validator.parse(raw)
    assert exc.value.kind is ErrorKind.INVALID_TIMESTAMP
    assert validator.try_parse(raw) is None


def test_comparisons_are_strict() -> None:
    early = datetime(2030, 1, 1, 8, 0, tzinfo=UTC)
    late = datetime(2030, 1, 1, 9, 0, tzinfo=UTC)

    assert is_before(early, late) and not is_before(late, early)
    assert is_after(late, early) and not is_after(early, early)
    assert is_same(early, early.astimezone(MYT))


def test_past_is_judged_against_local_now(validator: TimestampValidator) -> None:
    assert validator.now().tzinfo == MYT
    assert validator.is_past(datetime(2029, 12, 31, 15, 59, tzinfo=UTC))
    assert not validator.is_past(datetime(2029, 12, 31, 16, 0, tzinfo=UTC))
    assert validator.to_local(datetime(2029, 12, 31, 16, 0, tzinfo=UTC)).hour == 0


def test_end_of_local_day(validator: TimestampValidator) -> None:
    start = validator.parse("2030-01-01T09:30:00+08:00")
    assert validator.end_of_local_day(start) == datetime(2030, 1, 1, 16, 0, tzinfo=UTC)


def test_storage_round_trip_is_naive_utc() -> None:
    aware = datetime(2030, 1, 1, 16, 0, tzinfo=MYT)
    stored = to_storage(aware)

    assert stored == datetime(2030, 1, 1, 8, 0)
    assert stored.tzinfo is None
    assert from_storage(stored) == aware
