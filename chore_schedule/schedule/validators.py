"""Validators for wire block lists.

Enforces that a block list partitions every day of the week exactly:
- Every block resolves to a day and has parseable, on-the-hour timestamps
- An explicit day agrees with the date of the block's start timestamp
- start < end for every block
- Blocks of a day, sorted by start, begin at 00:00 and touch end to start
- The last block of a day ends at 24:00

Validation is strict and never repairs anything; a failing list must be
fixed by the user before it can be saved.
"""

from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from chore_schedule.schedule.calendar import date_from_timestamp, span_hours
from chore_schedule.schedule.codec import coerce_block, resolve_day
from chore_schedule.schedule.errors import MalformedBlockError, ScheduleValidationError
from chore_schedule.schedule.types import HOURS_PER_DAY, DayOfWeek, WireTimeBlock


class ValidationReason(StrEnum):
    GAP_OR_OVERLAP = "GAP_OR_OVERLAP"
    INVALID_INTERVAL = "INVALID_INTERVAL"
    UNDERCOVERAGE = "UNDERCOVERAGE"
    OVERCOVERAGE = "OVERCOVERAGE"
    MALFORMED_BLOCK = "MALFORMED_BLOCK"


class ValidationResult(BaseModel):
    """Outcome of validating a block list.

    ok is True and every other field is None when the list is valid;
    otherwise reason/day/detail describe the first finding (days are checked
    Monday first).
    """

    ok: bool = Field(description="Whether every day is partitioned exactly")
    reason: ValidationReason | None = Field(default=None, description="Finding type when not ok")
    day: DayOfWeek | None = Field(default=None, description="Day of the finding, None if unresolvable")
    detail: str | None = Field(default=None, description="Human readable description of the finding")

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: ValidationReason, day: DayOfWeek | None, detail: str) -> "ValidationResult":
        return cls(ok=False, reason=reason, day=day, detail=detail)


def _fmt_hour(hour: int) -> str:
    return f"{hour:02d}:00"


def _validate_day(day: DayOfWeek, spans: list[tuple[int, int]]) -> ValidationResult | None:
    cursor = 0
    for start_hour, end_hour in sorted(spans):
        if start_hour >= end_hour:
            return ValidationResult.failure(
                ValidationReason.INVALID_INTERVAL,
                day,
                f"block {_fmt_hour(start_hour)}-{_fmt_hour(end_hour)} must end after it starts",
            )
        if start_hour > cursor:
            return ValidationResult.failure(
                ValidationReason.GAP_OR_OVERLAP,
                day,
                f"gap from {_fmt_hour(cursor)} to {_fmt_hour(start_hour)}",
            )
        if start_hour < cursor:
            return ValidationResult.failure(
                ValidationReason.GAP_OR_OVERLAP,
                day,
                f"overlap from {_fmt_hour(start_hour)} to {_fmt_hour(min(cursor, end_hour))}",
            )
        cursor = end_hour

    if cursor < HOURS_PER_DAY:
        return ValidationResult.failure(
            ValidationReason.UNDERCOVERAGE,
            day,
            f"schedule ends at {_fmt_hour(cursor)}, must cover until 24:00",
        )
    if cursor > HOURS_PER_DAY:
        return ValidationResult.failure(
            ValidationReason.OVERCOVERAGE,
            day,
            f"schedule runs {cursor - HOURS_PER_DAY} hour(s) past 24:00",
        )
    return None


def _resolve_day_strict(block: WireTimeBlock) -> DayOfWeek:
    day = resolve_day(block)
    start_date = date_from_timestamp(block.start_time)
    if start_date.weekday() != day:
        raise MalformedBlockError(
            f"day {block.day!r} does not match start date {start_date.isoformat()} ({DayOfWeek(start_date.weekday()).name})"
        )
    return day


def validate_blocks(blocks: Iterable[Any]) -> ValidationResult:
    """Validate that blocks partition [0, 24) exactly on all 7 days.

    Args:
        blocks: Wire blocks (WireTimeBlock or raw mappings)

    Returns:
        ValidationResult, ok or describing the first finding
    """
    spans_by_day: dict[DayOfWeek, list[tuple[int, int]]] = {day: [] for day in DayOfWeek}

    for index, raw in enumerate(blocks):
        try:
            block = coerce_block(raw)
            day = _resolve_day_strict(block)
            spans_by_day[day].append(span_hours(block.start_time, block.end_time, strict=True))
        except MalformedBlockError as e:
            day_hint = None
            if isinstance(raw, WireTimeBlock):
                day_hint = raw.day
            elif isinstance(raw, Mapping):
                day_hint = raw.get("day") or raw.get("dayOfWeek")
            return ValidationResult.failure(
                ValidationReason.MALFORMED_BLOCK,
                None,
                f"block #{index} (day={day_hint!r}) cannot be resolved: {e}",
            )

    for day in DayOfWeek:
        finding = _validate_day(day, spans_by_day[day])
        if finding is not None:
            return finding
    return ValidationResult.success()


def ensure_valid_blocks(blocks: Iterable[Any]) -> None:
    """Validate blocks and raise when they do not partition every day.

    Raises:
        ScheduleValidationError: With the reason, day and detail of the first finding
    """
    result = validate_blocks(blocks)
    if not result.ok:
        raise ScheduleValidationError(str(result.reason), result.day, result.detail or "")
