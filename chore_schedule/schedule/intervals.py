"""Run-length merge of per-hour states into minimal contiguous ranges.

Single source of interval merging: the block codec builds wire blocks from
it and read-only timelines render from it.
"""

from collections.abc import Sequence
from typing import TypeVar

from chore_schedule.schedule.errors import InvalidArgumentError
from chore_schedule.schedule.model import WeekSchedule, day_states
from chore_schedule.schedule.types import HOURS_PER_DAY, DayOfWeek, HourRun, TimeBlock

S = TypeVar("S")


def merge_runs(states: Sequence[S]) -> list[HourRun[S]]:
    """Merge 24 per-hour states into maximal runs of equal state.

    The runs are ordered, never adjacent with equal state, and partition
    [0, 24) exactly. An all-equal day yields one run; a day alternating every
    hour yields 24.

    Args:
        states: Exactly 24 states, index = hour

    Returns:
        Ordered list of HourRun

    Raises:
        InvalidArgumentError: If states does not have 24 entries
    """
    if len(states) != HOURS_PER_DAY:
        raise InvalidArgumentError(f"Expected {HOURS_PER_DAY} hourly states, got {len(states)}")

    runs: list[HourRun[S]] = []
    current_state = states[0]
    run_start = 0
    for hour in range(1, HOURS_PER_DAY):
        if states[hour] != current_state:
            runs.append(HourRun(run_start, hour, current_state))
            current_state = states[hour]
            run_start = hour
    runs.append(HourRun(run_start, HOURS_PER_DAY, current_state))
    return runs


def day_blocks(week: WeekSchedule, day: DayOfWeek | int | str) -> list[TimeBlock]:
    """Return the minimal TimeBlock list for one day of week."""
    day = DayOfWeek.coerce(day)
    return [
        TimeBlock(day=day, state=run.state, start_hour=run.start_hour, end_hour=run.end_hour)
        for run in merge_runs(day_states(week, day))
    ]


def week_blocks(week: WeekSchedule) -> list[TimeBlock]:
    """Return minimal TimeBlocks for the whole week, Monday first."""
    return [block for day in DayOfWeek for block in day_blocks(week, day)]
