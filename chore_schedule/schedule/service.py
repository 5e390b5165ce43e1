"""Schedule load/save orchestration.

Load: fetch a week (or the daily union for one date) from the store, order the
blocks by source precedence, decode tolerantly.
Save: encode the whole week, validate strictly, push the whole week. Nothing
is pushed when validation fails.
"""

from collections.abc import Iterable
from datetime import date
from enum import StrEnum
from typing import Any

from loguru import logger

from chore_schedule.config.settings import settings
from chore_schedule.schedule.calendar import next_week_start, to_date, week_start
from chore_schedule.schedule.codec import decode, encode
from chore_schedule.schedule.errors import InvalidArgumentError, ScheduleStoreError
from chore_schedule.schedule.model import DaySchedule, WeekSchedule, create_empty, day_states
from chore_schedule.schedule.store import ScheduleStore
from chore_schedule.schedule.types import TimeSlotState, WeekKind, WireTimeBlock
from chore_schedule.schedule.validators import ensure_valid_blocks
from chore_schedule.schedule.wire import order_by_precedence


class EditorMode(StrEnum):
    ONBOARDING = "onboarding"  # first schedule, saved into the current week
    EDIT = "edit"  # changes, saved as next week's pending schedule


class ScheduleService:
    """Whole-week schedule persistence on top of a ScheduleStore."""

    def __init__(
        self,
        store: ScheduleStore,
        *,
        fallback_to_empty: bool | None = None,
        task_state: TimeSlotState | None = None,
    ):
        self._store = store
        self._fallback_to_empty = settings.fallback_to_empty if fallback_to_empty is None else fallback_to_empty
        self._task_state = task_state

    def load(self, kind: WeekKind, on: date | str | None = None) -> WeekSchedule:
        """Load and decode a week.

        Args:
            kind: ACTIVE, PENDING or DAILY_UNION
            on: Date for DAILY_UNION

        Returns:
            Decoded WeekSchedule; an empty schedule when the store fails and
            fallback_to_empty is enabled

        Raises:
            ScheduleStoreError: If the store fails and fallback_to_empty is disabled
        """
        on_date = to_date(on) if on is not None else None
        try:
            raw_blocks = self._store.load_week(kind, on_date)
        except ScheduleStoreError:
            if not self._fallback_to_empty:
                raise
            logger.exception(f"Failed to load {kind} schedule, falling back to an empty schedule")
            return create_empty()

        logger.info(f"Loaded {len(raw_blocks)} schedule blocks for {kind}")
        return decode(order_by_precedence(raw_blocks), task_state=self._task_state)

    def load_day(self, on: date | str) -> DaySchedule:
        """Return the 24 reconciled slots of one date from its daily union."""
        on_date = to_date(on)
        week = self.load(WeekKind.DAILY_UNION, on_date)
        return day_states(week, on_date.weekday())

    def save(self, week: WeekSchedule, week_start_date: date | str) -> list[WireTimeBlock]:
        """Encode, validate and push the whole week.

        Raises:
            InvalidArgumentError: If week_start_date is not a Monday
            ScheduleValidationError: If the encoded blocks do not partition every day
        """
        anchor = to_date(week_start_date)
        if anchor != week_start(anchor):
            raise InvalidArgumentError(f"Weeks are saved by their Monday, got {anchor.isoformat()} ({anchor.strftime('%A')})")
        blocks = encode(week, anchor)
        ensure_valid_blocks(blocks)
        self._store.save_week(blocks, anchor)
        logger.info(f"Saved schedule for week {anchor.isoformat()} ({len(blocks)} blocks)")
        return blocks

    def save_for(self, mode: EditorMode, week: WeekSchedule, today: date | str) -> list[WireTimeBlock]:
        """Save into the current week when onboarding, otherwise into next week."""
        if EditorMode(mode) == EditorMode.ONBOARDING:
            anchor = week_start(today)
        else:
            anchor = next_week_start(today)
        return self.save(week, anchor)

    def accept_external(self, blocks: Iterable[Any]) -> WeekSchedule:
        """Validate an externally supplied block list, then decode it.

        Raises:
            ScheduleValidationError: If the blocks do not partition every day
        """
        blocks = list(blocks)
        ensure_valid_blocks(blocks)
        return decode(blocks, task_state=self._task_state)
