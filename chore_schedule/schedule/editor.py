"""Explicit state container for editing a WeekSchedule.

The editor owns the current schedule value and its undo/redo history. All
edits go through the pure operations in chore_schedule.schedule.model, so
history entries are plain previous values; nothing is ever mutated.
"""

from collections.abc import Callable
from typing import Any

from chore_schedule.config.settings import settings
from chore_schedule.schedule import model
from chore_schedule.schedule.model import WeekSchedule
from chore_schedule.schedule.types import DayOfWeek, TimeSlotState

ScheduleOp = Callable[..., WeekSchedule]

Day = DayOfWeek | int | str
State = TimeSlotState | str


class ScheduleEditor:
    """Undoable schedule editing session.

    Rules:
    - apply() records history only when the operation changes the schedule
    - a new edit after undo() discards the redo stack
    - history is capped at history_limit entries (oldest dropped first)
    """

    def __init__(self, initial: WeekSchedule | None = None, history_limit: int | None = None):
        self._schedule = initial if initial is not None else model.create_empty()
        self._saved = self._schedule
        self._undo: list[WeekSchedule] = []
        self._redo: list[WeekSchedule] = []
        self._history_limit = history_limit if history_limit is not None else settings.editor_history_limit

    @property
    def schedule(self) -> WeekSchedule:
        return self._schedule

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def is_dirty(self) -> bool:
        """Whether the schedule differs from the last loaded or saved value."""
        return self._schedule != self._saved

    def apply(self, op: ScheduleOp, *args: Any) -> WeekSchedule:
        """Run a pure model operation against the current schedule and record it."""
        updated = op(self._schedule, *args)
        if updated == self._schedule:
            return self._schedule
        self._undo.append(self._schedule)
        if len(self._undo) > self._history_limit:
            del self._undo[0]
        self._redo.clear()
        self._schedule = updated
        return updated

    def set_slot(self, day: Day, hour: int, state: State) -> WeekSchedule:
        return self.apply(model.set_slot, day, hour, state)

    def set_range(self, day: Day, start_hour: int, end_hour: int, state: State) -> WeekSchedule:
        return self.apply(model.set_range, day, start_hour, end_hour, state)

    def toggle(self, day: Day, hour: int, paint_state: State) -> WeekSchedule:
        return self.apply(model.toggle_slot, day, hour, paint_state)

    def copy_day(self, src_day: Day, dst_day: Day) -> WeekSchedule:
        return self.apply(model.copy_day, src_day, dst_day)

    def clear_day(self, day: Day) -> WeekSchedule:
        return self.apply(model.clear_day, day)

    def apply_to_weekdays(self, source_day: Day) -> WeekSchedule:
        return self.apply(model.apply_to_weekdays, source_day)

    def apply_to_weekend(self, source_day: Day) -> WeekSchedule:
        return self.apply(model.apply_to_weekend, source_day)

    def reset(self) -> WeekSchedule:
        """Clear every day back to FREE (undoable)."""
        return self.apply(lambda _week: model.create_empty())

    def undo(self) -> WeekSchedule:
        if self._undo:
            self._redo.append(self._schedule)
            self._schedule = self._undo.pop()
        return self._schedule

    def redo(self) -> WeekSchedule:
        if self._redo:
            self._undo.append(self._schedule)
            self._schedule = self._redo.pop()
        return self._schedule

    def load(self, schedule: WeekSchedule) -> None:
        """Replace the schedule with a freshly loaded value and drop all history."""
        self._schedule = schedule
        self._saved = schedule
        self._undo.clear()
        self._redo.clear()

    def mark_saved(self) -> None:
        self._saved = self._schedule
