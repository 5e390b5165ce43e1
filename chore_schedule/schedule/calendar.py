"""Canonical week-window and timestamp helpers for availability schedules.

Week boundaries are Monday-Sunday (ISO week).

Wire timestamps look like "2025-11-24T09:00:00.000Z" but carry wall-clock
values: the hour digits are read and written literally and the trailing zone
marker is never interpreted.
"""

import re
from datetime import date, timedelta

from chore_schedule.schedule.errors import InvalidArgumentError, MalformedBlockError
from chore_schedule.schedule.types import DAYS_PER_WEEK, HOURS_PER_DAY, DayOfWeek

TIMESTAMP_SUFFIX = ":00:00.000Z"


def to_date(d: date | str) -> date:
    """Return d as a date, parsing YYYY-MM-DD strings."""
    if isinstance(d, date):
        return d
    try:
        return date.fromisoformat(d)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Invalid date: {d!r}") from e


def week_start(d: date | str) -> date:
    """Return Monday of the calendar week containing d (Sunday maps back to the previous Monday)."""
    d = to_date(d)
    return d - timedelta(days=d.weekday())


def week_end(d: date | str) -> date:
    """Return Sunday of the calendar week containing d."""
    return week_start(d) + timedelta(days=6)


def next_week_start(d: date | str) -> date:
    """Return Monday of the week after the one containing d."""
    return week_start(d) + timedelta(days=DAYS_PER_WEEK)


def add_days(d: date | str, days: int) -> date:
    return to_date(d) + timedelta(days=days)


def date_for_day(week_start_date: date | str, day: DayOfWeek | int) -> date:
    """Return the calendar date of a day within the week anchored at week_start_date.

    Args:
        week_start_date: Anchor date (normally a Monday)
        day: Day of week or 0..6 index

    Returns:
        week_start_date + day days

    Raises:
        InvalidArgumentError: If day is outside 0..6
    """
    return add_days(week_start_date, DayOfWeek.coerce(day).value)


def hour_to_timestamp(d: date | str, hour: int) -> str:
    """Convert a date and an hour boundary (0-24) to a wire timestamp.

    Hour 24 rolls forward to 00 of the next day, which is how the end of a
    half-open [start, 24) block is expressed in absolute time.

    Example:
        hour_to_timestamp("2025-11-24", 9) -> "2025-11-24T09:00:00.000Z"
        hour_to_timestamp("2025-11-24", 24) -> "2025-11-25T00:00:00.000Z"

    Raises:
        InvalidArgumentError: If hour is outside 0..24
    """
    if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= HOURS_PER_DAY:
        raise InvalidArgumentError(f"Hour boundary must be in 0..24, got {hour!r}")
    d = to_date(d)
    if hour == HOURS_PER_DAY:
        d = d + timedelta(days=1)
        hour = 0
    return f"{d.isoformat()}T{hour:02d}{TIMESTAMP_SUFFIX}"


def _split_timestamp(timestamp: str) -> tuple[str, str]:
    if not isinstance(timestamp, str) or "T" not in timestamp:
        raise MalformedBlockError(f"Invalid timestamp: {timestamp!r}")
    date_part, time_part = timestamp.split("T", 1)
    return date_part, time_part


def hour_from_timestamp(timestamp: str) -> int:
    """Extract the literal hour (0-23) from a wire timestamp.

    No timezone conversion is applied; "2025-11-24T09:00:00.000Z" -> 9.

    Raises:
        MalformedBlockError: If the timestamp has no parseable hour
    """
    _, time_part = _split_timestamp(timestamp)
    hour_digits = time_part.split(":", 1)[0]
    if not hour_digits.isdigit():
        raise MalformedBlockError(f"Invalid hour in timestamp: {timestamp!r}")
    hour = int(hour_digits)
    if hour >= HOURS_PER_DAY:
        raise MalformedBlockError(f"Hour out of range in timestamp: {timestamp!r}")
    return hour


def date_from_timestamp(timestamp: str) -> date:
    """Extract the literal calendar date from a wire timestamp."""
    date_part, _ = _split_timestamp(timestamp)
    try:
        return date.fromisoformat(date_part)
    except ValueError as e:
        raise MalformedBlockError(f"Invalid date in timestamp: {timestamp!r}") from e


def weekday_from_timestamp(timestamp: str) -> DayOfWeek:
    """Return the day of week of the literal date in a wire timestamp."""
    return DayOfWeek(date_from_timestamp(timestamp).weekday())


def is_on_the_hour(timestamp: str) -> bool:
    """Whether the minutes, seconds and fraction of a wire timestamp are all zero.

    "2025-11-24T09:00:00.000Z" -> True, "2025-11-24T09:30:00.000Z" -> False.
    The zone marker is ignored, like everywhere else.

    Raises:
        MalformedBlockError: If the timestamp has no time part
    """
    _, time_part = _split_timestamp(timestamp)
    clock = re.split(r"[Zz+-]", time_part, maxsplit=1)[0]
    return all(field.replace(".", "").strip("0") == "" for field in clock.split(":")[1:])


def span_hours(start_timestamp: str, end_timestamp: str, *, strict: bool = False) -> tuple[int, int]:
    """Return (start_hour, end_hour) of a block, measured on the start's calendar date.

    The end hour is offset by 24 for every day the end date lies past the
    start date, so an end of next-day 00:00 yields 24. The result is not
    clipped; callers intersect it with [0, 24) as needed.

    Args:
        start_timestamp: Inclusive start
        end_timestamp: Exclusive end
        strict: Reject timestamps that are not on the hour instead of truncating them

    Raises:
        MalformedBlockError: If either timestamp cannot be parsed, or is off the hour when strict
    """
    if strict:
        for timestamp in (start_timestamp, end_timestamp):
            if not is_on_the_hour(timestamp):
                raise MalformedBlockError(f"Timestamp is not on the hour: {timestamp!r}")
    start_hour = hour_from_timestamp(start_timestamp)
    end_hour = hour_from_timestamp(end_timestamp)
    day_offset = (date_from_timestamp(end_timestamp) - date_from_timestamp(start_timestamp)).days
    return start_hour, end_hour + day_offset * HOURS_PER_DAY
