"""Block codec: dense WeekSchedule <-> sparse wire blocks.

encode:
- Mon -> Sun, minimal runs per day from the interval merger
- Run boundaries anchored to week_start_date + day (hour 24 = next day 00:00)
- Day-major, then start ascending

decode:
- Starts from an all-FREE week
- Input may be a union of several sources for the same dates; blocks are
  applied in input order, so later blocks win on overlapping hours
- A block whose day or timestamps cannot be resolved is logged and skipped
- TASK (chore-occupied) blocks collapse to an editable state, FREE by default
"""

from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from loguru import logger
from pydantic import ValidationError

from chore_schedule.config.settings import settings
from chore_schedule.schedule.calendar import (
    date_for_day,
    hour_to_timestamp,
    span_hours,
    to_date,
    weekday_from_timestamp,
)
from chore_schedule.schedule.errors import InvalidArgumentError, MalformedBlockError
from chore_schedule.schedule.intervals import merge_runs
from chore_schedule.schedule.model import WeekSchedule, create_empty, day_states
from chore_schedule.schedule.types import (
    HOURS_PER_DAY,
    DayOfWeek,
    TimeSlotState,
    WireBlockType,
    WireTimeBlock,
)

_TO_WIRE: dict[TimeSlotState, WireBlockType] = {
    TimeSlotState.QUIET: WireBlockType.QUIET,
    TimeSlotState.BUSY: WireBlockType.BUSY,
    TimeSlotState.FREE: WireBlockType.FREE,
}


def to_wire_type(state: TimeSlotState) -> WireBlockType:
    return _TO_WIRE[TimeSlotState.coerce(state)]


def from_wire_type(block_type: WireBlockType | str, task_state: TimeSlotState | None = None) -> TimeSlotState:
    """Map a wire block type to its dense slot state.

    TASK has no editable counterpart and maps to task_state, which defaults
    to the configured task_block_state (FREE unless overridden).
    """
    block_type = WireBlockType(block_type)
    if block_type == WireBlockType.TASK:
        if task_state is None:
            return TimeSlotState(settings.task_block_state)
        return TimeSlotState.coerce(task_state)
    return TimeSlotState(block_type.value)


def encode(week: WeekSchedule, week_start_date: date | str) -> list[WireTimeBlock]:
    """Encode a dense schedule into the minimal wire block list.

    Args:
        week: Schedule to encode
        week_start_date: Calendar date of the week's Monday

    Returns:
        Wire blocks, Monday first, start-ascending within a day
    """
    anchor = to_date(week_start_date)
    if anchor.weekday() != DayOfWeek.MONDAY:
        logger.debug(f"Encoding schedule anchored on non-Monday week start {anchor.isoformat()}")

    blocks: list[WireTimeBlock] = []
    for day in DayOfWeek:
        day_date = date_for_day(anchor, day)
        for run in merge_runs(day_states(week, day)):
            blocks.append(
                WireTimeBlock(
                    day=day.wire_name,
                    type=to_wire_type(run.state),
                    start_time=hour_to_timestamp(day_date, run.start_hour),
                    end_time=hour_to_timestamp(day_date, run.end_hour),
                )
            )
    return blocks


def coerce_block(raw: WireTimeBlock | Mapping[str, Any]) -> WireTimeBlock:
    """Return raw as a WireTimeBlock, validating mappings with the wire schema.

    Raises:
        MalformedBlockError: If the mapping does not match the wire schema
    """
    if isinstance(raw, WireTimeBlock):
        return raw
    try:
        return WireTimeBlock.model_validate(raw)
    except ValidationError as e:
        raise MalformedBlockError(f"Block does not match wire schema: {e.error_count()} error(s)") from e


def resolve_day(block: WireTimeBlock) -> DayOfWeek:
    """Resolve the day a block belongs to.

    Uses the explicit day field when present, otherwise the weekday of the
    start timestamp's literal date.

    Raises:
        MalformedBlockError: If the day cannot be resolved
    """
    if block.day is None:
        return weekday_from_timestamp(block.start_time)
    try:
        return DayOfWeek.coerce(block.day)
    except InvalidArgumentError as e:
        raise MalformedBlockError(f"Unknown day {block.day!r}") from e


def decode(
    blocks: Iterable[WireTimeBlock | Mapping[str, Any]],
    *,
    task_state: TimeSlotState | None = None,
) -> WeekSchedule:
    """Decode wire blocks into a dense schedule, best effort.

    Args:
        blocks: Wire blocks (models or raw mappings), in precedence order
        task_state: Dense state for TASK blocks; None uses the configured default

    Returns:
        WeekSchedule with every decodable block applied
    """
    days: list[list[TimeSlotState]] = [list(day) for day in create_empty().days]
    skipped = 0

    for index, raw in enumerate(blocks):
        try:
            block = coerce_block(raw)
            day = resolve_day(block)
            start_hour, end_hour = span_hours(block.start_time, block.end_time)
        except MalformedBlockError as e:
            skipped += 1
            logger.warning(f"Skipping malformed schedule block #{index}: {e}")
            continue

        state = from_wire_type(block.type, task_state)
        for hour in range(max(start_hour, 0), min(end_hour, HOURS_PER_DAY)):
            days[day][hour] = state

    if skipped:
        logger.debug(f"Decoded schedule with {skipped} malformed block(s) skipped")
    return WeekSchedule(tuple(tuple(day) for day in days))
