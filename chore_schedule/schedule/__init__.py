"""Schedule module - weekly availability model and wire codec.

This module provides:
- The dense 7x24 availability model and its pure edit operations
- Run-length merging of hourly states into minimal blocks
- Encode/decode between the dense model and timestamped wire blocks
- Strict validation of wire block lists
- An undoable editor and whole-week load/save service
"""

from chore_schedule.schedule.codec import decode, encode, from_wire_type, resolve_day, to_wire_type
from chore_schedule.schedule.editor import ScheduleEditor
from chore_schedule.schedule.errors import (
    InvalidArgumentError,
    MalformedBlockError,
    ScheduleError,
    ScheduleStoreError,
    ScheduleValidationError,
)
from chore_schedule.schedule.intervals import day_blocks, merge_runs, week_blocks
from chore_schedule.schedule.model import (
    WeekSchedule,
    apply_to_weekdays,
    apply_to_weekend,
    available_hours,
    clear_day,
    copy_day,
    create_empty,
    get_slot,
    is_empty,
    set_range,
    set_slot,
    toggle_slot,
    total_available_hours,
)
from chore_schedule.schedule.service import EditorMode, ScheduleService
from chore_schedule.schedule.store import InMemoryScheduleStore, ScheduleStore
from chore_schedule.schedule.types import (
    DayOfWeek,
    HourRun,
    TimeBlock,
    TimeSlotState,
    WeekKind,
    WireBlockType,
    WireTimeBlock,
)
from chore_schedule.schedule.validators import ValidationReason, ValidationResult, ensure_valid_blocks, validate_blocks

__all__ = [
    "DayOfWeek",
    "EditorMode",
    "HourRun",
    "InMemoryScheduleStore",
    "InvalidArgumentError",
    "MalformedBlockError",
    "ScheduleEditor",
    "ScheduleError",
    "ScheduleService",
    "ScheduleStore",
    "ScheduleStoreError",
    "ScheduleValidationError",
    "TimeBlock",
    "TimeSlotState",
    "ValidationReason",
    "ValidationResult",
    "WeekKind",
    "WeekSchedule",
    "WireBlockType",
    "WireTimeBlock",
    "apply_to_weekdays",
    "apply_to_weekend",
    "available_hours",
    "clear_day",
    "copy_day",
    "create_empty",
    "day_blocks",
    "decode",
    "encode",
    "ensure_valid_blocks",
    "from_wire_type",
    "get_slot",
    "is_empty",
    "merge_runs",
    "resolve_day",
    "set_range",
    "set_slot",
    "to_wire_type",
    "toggle_slot",
    "total_available_hours",
    "validate_blocks",
    "week_blocks",
]
