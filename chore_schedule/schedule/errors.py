"""Domain-specific errors for the availability schedule.

Decode is tolerant: MalformedBlockError is raised by the low-level helpers and
caught by the decoder, which logs and skips the offending block.
Encode and validate are strict: ScheduleValidationError blocks a save.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chore_schedule.schedule.types import DayOfWeek


class ScheduleError(Exception):
    """Base exception for all schedule errors."""

    pass


class InvalidArgumentError(ScheduleError, ValueError):
    """Raised when a day, hour, state or grid shape is out of range."""

    pass


class MalformedBlockError(ScheduleError):
    """Raised when a wire block cannot be resolved to a day or hour range."""

    pass


class ScheduleValidationError(ScheduleError):
    """Raised when a block list does not partition every day exactly.

    Attributes:
        code: Validation reason (e.g., "GAP_OR_OVERLAP", "UNDERCOVERAGE")
        day: Day the finding refers to, None when the day is unknown
        details: Human readable description of the finding
    """

    def __init__(self, code: str, day: DayOfWeek | None, details: str):
        self.code = code
        self.day = day
        self.details = details
        where = day.name if day is not None else "unknown day"
        super().__init__(f"{code} on {where}: {details}")


class ScheduleStoreError(ScheduleError):
    """Raised by a schedule store when a week cannot be fetched or persisted."""

    pass
