"""Dense 7x24 availability model.

WeekSchedule is an immutable value. Every operation here is pure: it returns
a new WeekSchedule and never mutates its input, so a schedule can be shared
freely and kept in undo history.

Rules:
- Every WeekSchedule has exactly 7 days x 24 hours (168 slots)
- Out-of-range day/hour/state raises InvalidArgumentError
- Every other call is total
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from chore_schedule.schedule.errors import InvalidArgumentError
from chore_schedule.schedule.types import (
    DAYS_PER_WEEK,
    HOURS_PER_DAY,
    WEEKDAYS,
    WEEKEND,
    DayOfWeek,
    TimeSlotState,
)

DaySchedule = tuple[TimeSlotState, ...]

_FREE_DAY: DaySchedule = (TimeSlotState.FREE,) * HOURS_PER_DAY


@dataclass(frozen=True)
class WeekSchedule:
    """Immutable weekly availability grid.

    Attributes:
        days: 7 day schedules (Monday first), each a tuple of 24 slot states
    """

    days: tuple[DaySchedule, ...]

    def __post_init__(self) -> None:
        if len(self.days) != DAYS_PER_WEEK:
            raise InvalidArgumentError(f"WeekSchedule needs {DAYS_PER_WEEK} days, got {len(self.days)}")
        for index, day in enumerate(self.days):
            if len(day) != HOURS_PER_DAY:
                raise InvalidArgumentError(
                    f"{DayOfWeek(index).name} needs {HOURS_PER_DAY} hours, got {len(day)}"
                )
            if not all(isinstance(slot, TimeSlotState) for slot in day):
                raise InvalidArgumentError(f"{DayOfWeek(index).name} contains a non TimeSlotState value")

    @classmethod
    def from_grid(cls, rows: Sequence[Sequence[TimeSlotState | str]]) -> "WeekSchedule":
        """Build a schedule from 7 rows of 24 states (enum members or their string values)."""
        return cls(tuple(tuple(TimeSlotState.coerce(slot) for slot in row) for row in rows))

    def to_grid(self) -> list[list[str]]:
        return [[slot.value for slot in day] for day in self.days]

    def slots(self) -> Iterable[tuple[DayOfWeek, int, TimeSlotState]]:
        for index, day in enumerate(self.days):
            for hour, slot in enumerate(day):
                yield DayOfWeek(index), hour, slot


def _check_hour(hour: int) -> int:
    if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour < HOURS_PER_DAY:
        raise InvalidArgumentError(f"Hour must be in 0..23, got {hour!r}")
    return hour


def _replace_day(week: WeekSchedule, day: DayOfWeek, new_day: DaySchedule) -> WeekSchedule:
    days = list(week.days)
    days[day] = new_day
    return WeekSchedule(tuple(days))


def create_empty() -> WeekSchedule:
    """Return a schedule with every slot FREE."""
    return WeekSchedule((_FREE_DAY,) * DAYS_PER_WEEK)


def day_states(week: WeekSchedule, day: DayOfWeek | int | str) -> DaySchedule:
    return week.days[DayOfWeek.coerce(day)]


def get_slot(week: WeekSchedule, day: DayOfWeek | int | str, hour: int) -> TimeSlotState:
    return day_states(week, day)[_check_hour(hour)]


def set_slot(
    week: WeekSchedule,
    day: DayOfWeek | int | str,
    hour: int,
    state: TimeSlotState | str,
) -> WeekSchedule:
    """Return a copy of week with one slot set to state."""
    return set_range(week, day, _check_hour(hour), hour + 1, state)


def set_range(
    week: WeekSchedule,
    day: DayOfWeek | int | str,
    start_hour: int,
    end_hour: int,
    state: TimeSlotState | str,
) -> WeekSchedule:
    """Return a copy of week with [start_hour, end_hour) of day set to state.

    Args:
        week: Source schedule
        day: Day to edit
        start_hour: Inclusive start (0-24)
        end_hour: Exclusive end (0-24); equal to start_hour means no change
        state: State to fill with

    Raises:
        InvalidArgumentError: If the range is reversed or outside [0, 24]
    """
    day = DayOfWeek.coerce(day)
    state = TimeSlotState.coerce(state)
    for bound in (start_hour, end_hour):
        if isinstance(bound, bool) or not isinstance(bound, int) or not 0 <= bound <= HOURS_PER_DAY:
            raise InvalidArgumentError(f"Hour bound must be in 0..24, got {bound!r}")
    if start_hour > end_hour:
        raise InvalidArgumentError(f"start_hour ({start_hour}) must be <= end_hour ({end_hour})")

    current = week.days[day]
    updated = current[:start_hour] + (state,) * (end_hour - start_hour) + current[end_hour:]
    return _replace_day(week, day, updated)


def toggle_slot(
    week: WeekSchedule,
    day: DayOfWeek | int | str,
    hour: int,
    paint_state: TimeSlotState | str,
) -> WeekSchedule:
    """Paint a slot, or erase it back to FREE when it already holds paint_state.

    Repeated clicks with the same tool therefore alternate between
    paint_state and FREE.
    """
    paint_state = TimeSlotState.coerce(paint_state)
    if get_slot(week, day, hour) == paint_state:
        return set_slot(week, day, hour, TimeSlotState.FREE)
    return set_slot(week, day, hour, paint_state)


def copy_day(week: WeekSchedule, src_day: DayOfWeek | int | str, dst_day: DayOfWeek | int | str) -> WeekSchedule:
    """Replace dst_day's 24 hours with src_day's."""
    return _replace_day(week, DayOfWeek.coerce(dst_day), day_states(week, src_day))


def clear_day(week: WeekSchedule, day: DayOfWeek | int | str) -> WeekSchedule:
    return _replace_day(week, DayOfWeek.coerce(day), _FREE_DAY)


def _copy_to(week: WeekSchedule, source_day: DayOfWeek | int | str, targets: Iterable[DayOfWeek]) -> WeekSchedule:
    source = day_states(week, source_day)
    days = list(week.days)
    for target in targets:
        days[target] = source
    return WeekSchedule(tuple(days))


def apply_to_weekdays(week: WeekSchedule, source_day: DayOfWeek | int | str) -> WeekSchedule:
    """Copy source_day onto Monday through Friday."""
    return _copy_to(week, source_day, WEEKDAYS)


def apply_to_weekend(week: WeekSchedule, source_day: DayOfWeek | int | str) -> WeekSchedule:
    """Copy source_day onto Saturday and Sunday."""
    return _copy_to(week, source_day, WEEKEND)


def is_empty(week: WeekSchedule) -> bool:
    return all(day == _FREE_DAY for day in week.days)


def available_hours(week: WeekSchedule, day: DayOfWeek | int | str) -> int:
    """Count FREE hours on day, i.e. hours a chore can be assigned to."""
    return sum(1 for slot in day_states(week, day) if slot == TimeSlotState.FREE)


def total_available_hours(week: WeekSchedule) -> int:
    return sum(available_hours(week, day) for day in DayOfWeek)
