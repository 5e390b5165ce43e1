"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from datetime import date

import pytest
from loguru import logger

from chore_schedule.schedule.model import WeekSchedule, create_empty, set_range
from chore_schedule.schedule.types import DayOfWeek, TimeSlotState

# Monday
WEEK_START = date(2025, 11, 24)


@pytest.fixture
def week_start_date() -> date:
    return WEEK_START


@pytest.fixture
def log_records():
    """Capture loguru records emitted during a test.

    Yields a list of record dicts (level name under record["level"].name).
    """
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def workday_week() -> WeekSchedule:
    """Quiet nights, busy office hours Monday to Friday, free weekend."""
    week = create_empty()
    for day in (DayOfWeek.MONDAY, DayOfWeek.TUESDAY, DayOfWeek.WEDNESDAY, DayOfWeek.THURSDAY, DayOfWeek.FRIDAY):
        week = set_range(week, day, 0, 8, TimeSlotState.QUIET)
        week = set_range(week, day, 8, 18, TimeSlotState.BUSY)
        week = set_range(week, day, 23, 24, TimeSlotState.QUIET)
    return week
