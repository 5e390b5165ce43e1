"""Availability schedule data types.

Dense side:
- TimeSlotState: the three editable per-hour states
- DayOfWeek: Monday-first day index (0=Mon ... 6=Sun)
- TimeBlock / HourRun: half-open hour intervals [start_hour, end_hour)

Wire side:
- WireBlockType: the four states carried on the wire (TASK is read-only)
- WireTimeBlock: one sparse block with absolute, wall-clock timestamps
"""

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Generic, Literal, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from chore_schedule.schedule.errors import InvalidArgumentError

HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7


class TimeSlotState(StrEnum):
    QUIET = "QUIET"
    BUSY = "BUSY"
    FREE = "FREE"

    @classmethod
    def coerce(cls, value: "TimeSlotState | str") -> "TimeSlotState":
        """Return value as a TimeSlotState, raising InvalidArgumentError otherwise."""
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid time slot state: {value!r}") from e


class WireBlockType(StrEnum):
    QUIET = "QUIET"
    BUSY = "BUSY"
    TASK = "TASK"  # occupied by an assigned chore, never edited here
    FREE = "FREE"


class DayOfWeek(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def wire_name(self) -> str:
        return self.name

    @classmethod
    def coerce(cls, value: "DayOfWeek | int | str") -> "DayOfWeek":
        """Resolve a day from a DayOfWeek, a 0..6 index or a wire name ("MONDAY").

        Raises:
            InvalidArgumentError: If value does not name one of the 7 days
        """
        if isinstance(value, DayOfWeek):
            return value
        if isinstance(value, bool):
            raise InvalidArgumentError(f"Invalid day: {value!r}")
        if isinstance(value, int):
            if 0 <= value < DAYS_PER_WEEK:
                return cls(value)
            raise InvalidArgumentError(f"Day index must be in 0..6, got {value}")
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError as e:
                raise InvalidArgumentError(f"Invalid day name: {value!r}") from e
        raise InvalidArgumentError(f"Invalid day: {value!r}")


WEEKDAYS: tuple[DayOfWeek, ...] = (
    DayOfWeek.MONDAY,
    DayOfWeek.TUESDAY,
    DayOfWeek.WEDNESDAY,
    DayOfWeek.THURSDAY,
    DayOfWeek.FRIDAY,
)
WEEKEND: tuple[DayOfWeek, ...] = (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY)


class ScheduleSource(StrEnum):
    """Where a wire block came from. Later sources win in a daily union."""

    ACTIVE = "ACTIVE"
    TEMPORARY = "TEMPORARY"
    HISTORY = "HISTORY"


class WeekKind(StrEnum):
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    DAILY_UNION = "DAILY_UNION"


S = TypeVar("S")


@dataclass(frozen=True)
class HourRun(Generic[S]):
    """One maximal run of equal states, covering [start_hour, end_hour)."""

    start_hour: int
    end_hour: int
    state: S

    @property
    def length(self) -> int:
        return self.end_hour - self.start_hour


@dataclass(frozen=True)
class TimeBlock:
    """Hour-based in-memory block for one day.

    Attributes:
        day: Day the block belongs to
        state: Slot state for every hour in the block
        start_hour: Inclusive start hour (0-23)
        end_hour: Exclusive end hour (1-24)
    """

    day: DayOfWeek
    state: TimeSlotState
    start_hour: int
    end_hour: int

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour < self.end_hour <= HOURS_PER_DAY:
            raise InvalidArgumentError(
                f"TimeBlock requires 0 <= start_hour < end_hour <= 24, got [{self.start_hour}, {self.end_hour})"
            )

    def hours(self) -> range:
        return range(self.start_hour, self.end_hour)


class WireTimeBlock(BaseModel):
    """Sparse wire block as sent to and received from the schedule API.

    Timestamps look like ISO-8601 with a "Z" suffix but are wall-clock values;
    they are never timezone-converted.

    Attributes:
        day: Wire day name ("MONDAY".."SUNDAY"); optional, derived from start_time when missing
        type: Block type
        start_time: Inclusive start timestamp
        end_time: Exclusive end timestamp
        id: Server-side block id (responses only)
        status: ACTIVE or TEMPORARY (responses only; archived history has none)
        user_id: Owner id (responses only)
        room_task_id: Chore id for TASK blocks (responses only)
        difficulty: Chore difficulty for TASK blocks (responses only)
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    day: str | None = Field(
        default=None,
        validation_alias=AliasChoices("day", "dayOfWeek"),
        serialization_alias="day",
    )
    type: WireBlockType
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")

    id: str | None = None
    status: Literal["ACTIVE", "TEMPORARY"] | None = None
    user_id: str | None = Field(default=None, alias="userId")
    room_task_id: str | None = Field(default=None, alias="roomTaskId")
    difficulty: int | None = None
