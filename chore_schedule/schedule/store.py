"""Schedule storage boundary.

Stores persist whole weeks only. A save replaces the full 7-day block list
for its week (last writer wins); there is no partial or incremental update.
"""

from collections.abc import Callable, Iterable, Mapping
from datetime import date
from typing import Any, Protocol

from loguru import logger

from chore_schedule.schedule.calendar import date_from_timestamp, next_week_start, to_date, week_start
from chore_schedule.schedule.errors import MalformedBlockError, ScheduleStoreError
from chore_schedule.schedule.types import WeekKind, WireTimeBlock

RawBlock = WireTimeBlock | Mapping[str, Any]


class ScheduleStore(Protocol):
    """Whole-week schedule persistence."""

    def load_week(self, kind: WeekKind, on: date | None = None) -> list[RawBlock]:
        """Fetch blocks for the active week, the pending week, or the union for one date."""
        ...

    def save_week(self, blocks: list[WireTimeBlock], week_start_date: date) -> None:
        """Replace the whole week starting at week_start_date with blocks."""
        ...


class InMemoryScheduleStore:
    """Process-local ScheduleStore.

    Weeks are keyed by their Monday and status. A save for the current (or an
    earlier) week is stored ACTIVE; a save for a later week is stored pending
    (TEMPORARY). A pending week still serves as the active one after it starts,
    until an ACTIVE save for that week takes over. Archived per-day history is
    kept separately and only returned in a daily union.
    """

    def __init__(self, clock: Callable[[], date] = date.today):
        self._clock = clock
        self._weeks: dict[tuple[date, str], list[WireTimeBlock]] = {}
        self._history: dict[date, list[RawBlock]] = {}

    def _status_for(self, week_start_date: date) -> str:
        return "ACTIVE" if week_start_date <= week_start(self._clock()) else "TEMPORARY"

    def save_week(self, blocks: list[WireTimeBlock], week_start_date: date | str) -> None:
        anchor = to_date(week_start_date)
        status = self._status_for(anchor)
        self._weeks[(anchor, status)] = [block.model_copy(update={"status": status}) for block in blocks]
        logger.info(f"Stored {len(blocks)} schedule blocks for week {anchor.isoformat()} as {status}")

    def archive_day(self, on: date | str, blocks: Iterable[RawBlock]) -> None:
        """Record archived history blocks for one date (appended after earlier records)."""
        self._history.setdefault(to_date(on), []).extend(blocks)

    def load_week(self, kind: WeekKind, on: date | None = None) -> list[RawBlock]:
        today = self._clock()
        if kind == WeekKind.ACTIVE:
            return self._current_week(week_start(today))
        if kind == WeekKind.PENDING:
            return list(self._weeks.get((next_week_start(today), "TEMPORARY"), []))
        if kind == WeekKind.DAILY_UNION:
            if on is None:
                raise ScheduleStoreError("A daily union needs a date")
            return self._daily_union(to_date(on))
        raise ScheduleStoreError(f"Unknown week kind: {kind!r}")

    def _current_week(self, anchor: date) -> list[RawBlock]:
        blocks = self._weeks.get((anchor, "ACTIVE"))
        if blocks is None:
            blocks = self._weeks.get((anchor, "TEMPORARY"), [])
            if blocks:
                logger.debug(f"No active schedule for week {anchor.isoformat()}, using the pending one")
        return list(blocks)

    def _daily_union(self, on: date) -> list[RawBlock]:
        union: list[RawBlock] = []
        for status in ("ACTIVE", "TEMPORARY"):
            for block in self._weeks.get((week_start(on), status), []):
                try:
                    if date_from_timestamp(block.start_time) == on:
                        union.append(block)
                except MalformedBlockError:
                    logger.warning(f"Ignoring stored block with unreadable start time {block.start_time!r}")
        union.extend(self._history.get(on, []))
        return union
