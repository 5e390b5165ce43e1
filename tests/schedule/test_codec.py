"""Tests for the block codec (dense <-> wire).

Covers:
- Minimal, day-major encoding anchored to the week start
- Round trip decode(encode(W)) == W
- Tolerant decode (malformed blocks skipped with one warning each)
- Input-order precedence on overlapping blocks
- Lossy TASK -> FREE mapping
"""

import random
from datetime import date

import pytest

from chore_schedule.schedule.codec import decode, encode, from_wire_type, resolve_day, to_wire_type
from chore_schedule.schedule.errors import MalformedBlockError
from chore_schedule.schedule.model import WeekSchedule, create_empty, day_states, get_slot, set_range
from chore_schedule.schedule.types import DayOfWeek, TimeSlotState, WireBlockType, WireTimeBlock

QUIET = TimeSlotState.QUIET
BUSY = TimeSlotState.BUSY
FREE = TimeSlotState.FREE


def random_week(rng: random.Random) -> WeekSchedule:
    week = create_empty()
    for day in DayOfWeek:
        for _ in range(rng.randrange(0, 6)):
            start = rng.randrange(0, 24)
            end = rng.randrange(start, 25)
            week = set_range(week, day, start, end, rng.choice([QUIET, BUSY, FREE]))
    return week


class TestStateMapping:
    def test_to_wire(self):
        assert to_wire_type(QUIET) == WireBlockType.QUIET
        assert to_wire_type(BUSY) == WireBlockType.BUSY
        assert to_wire_type(FREE) == WireBlockType.FREE

    def test_task_collapses_to_free(self):
        assert from_wire_type(WireBlockType.TASK) == FREE

    def test_task_mapping_is_configurable(self):
        assert from_wire_type("TASK", task_state=BUSY) == BUSY

    def test_other_types_ignore_task_state(self):
        assert from_wire_type("QUIET", task_state=BUSY) == QUIET


class TestEncode:
    def test_empty_week_monday_is_one_free_block(self, week_start_date):
        """An empty Monday encodes as one FREE block from 00:00 to next-day 00:00."""
        blocks = encode(create_empty(), week_start_date)
        monday = [b for b in blocks if b.day == "MONDAY"]
        assert monday == [
            WireTimeBlock(
                day="MONDAY",
                type=WireBlockType.FREE,
                start_time="2025-11-24T00:00:00.000Z",
                end_time="2025-11-25T00:00:00.000Z",
            )
        ]
        assert len(blocks) == 7

    def test_quiet_busy_free_monday(self, week_start_date):
        """Quiet night, busy day, free evening -> three Monday blocks."""
        week = set_range(create_empty(), DayOfWeek.MONDAY, 0, 8, QUIET)
        week = set_range(week, DayOfWeek.MONDAY, 8, 18, BUSY)
        monday = [b for b in encode(week, week_start_date) if b.day == "MONDAY"]
        assert [(b.type, b.start_time, b.end_time) for b in monday] == [
            (WireBlockType.QUIET, "2025-11-24T00:00:00.000Z", "2025-11-24T08:00:00.000Z"),
            (WireBlockType.BUSY, "2025-11-24T08:00:00.000Z", "2025-11-24T18:00:00.000Z"),
            (WireBlockType.FREE, "2025-11-24T18:00:00.000Z", "2025-11-25T00:00:00.000Z"),
        ]

    def test_sunday_end_rolls_into_next_week(self, week_start_date):
        sunday = [b for b in encode(create_empty(), week_start_date) if b.day == "SUNDAY"]
        assert sunday[0].start_time == "2025-11-30T00:00:00.000Z"
        assert sunday[0].end_time == "2025-12-01T00:00:00.000Z"

    def test_ordering_is_day_major_then_start(self, workday_week, week_start_date):
        blocks = encode(workday_week, week_start_date)
        keys = [(DayOfWeek[b.day], b.start_time) for b in blocks]
        assert keys == sorted(keys)

    def test_accepts_iso_string_anchor(self, workday_week):
        assert encode(workday_week, "2025-11-24") == encode(workday_week, date(2025, 11, 24))

    def test_never_emits_adjacent_equal_blocks(self, week_start_date):
        rng = random.Random(1)
        for _ in range(100):
            blocks = encode(random_week(rng), week_start_date)
            for prev, nxt in zip(blocks, blocks[1:]):
                if prev.day == nxt.day:
                    assert prev.type != nxt.type
                    assert prev.end_time == nxt.start_time


class TestRoundTrip:
    def test_workday_week(self, workday_week, week_start_date):
        assert decode(encode(workday_week, week_start_date)) == workday_week

    @pytest.mark.parametrize("anchor", [date(2025, 11, 24), date(2024, 2, 26), date(2025, 12, 29), date(2025, 11, 26)])
    def test_random_weeks(self, anchor):
        rng = random.Random(anchor.toordinal())
        for _ in range(50):
            week = random_week(rng)
            assert decode(encode(week, anchor)) == week

    def test_without_day_field(self, workday_week, week_start_date):
        """Days are derived from the start timestamp when the day field is absent."""
        blocks = [b.model_copy(update={"day": None}) for b in encode(workday_week, week_start_date)]
        assert decode(blocks) == workday_week


class TestDecode:
    def test_empty_input_is_empty_week(self):
        assert decode([]) == create_empty()

    def test_task_block_decodes_to_free(self):
        """A chore-occupied block is not editable and shows as FREE."""
        week = decode([
            {"day": "MONDAY", "type": "TASK", "startTime": "2025-11-24T09:00:00.000Z", "endTime": "2025-11-24T10:00:00.000Z"}
        ])
        assert get_slot(week, DayOfWeek.MONDAY, 9) == FREE
        assert week == create_empty()

    def test_task_block_with_configured_state(self):
        week = decode(
            [{"day": "MONDAY", "type": "TASK", "startTime": "2025-11-24T09:00:00.000Z", "endTime": "2025-11-24T10:00:00.000Z"}],
            task_state=BUSY,
        )
        assert get_slot(week, DayOfWeek.MONDAY, 9) == BUSY

    def test_legacy_day_of_week_key(self):
        week = decode([
            {"dayOfWeek": "FRIDAY", "type": "QUIET", "startTime": "2025-11-28T22:00:00.000Z", "endTime": "2025-11-29T00:00:00.000Z"}
        ])
        assert day_states(week, DayOfWeek.FRIDAY)[22:] == (QUIET, QUIET)

    def test_day_derived_from_start_timestamp(self):
        week = decode([{"type": "BUSY", "startTime": "2025-11-22T20:00:00.000Z", "endTime": "2025-11-22T22:00:00.000Z"}])
        assert get_slot(week, DayOfWeek.SATURDAY, 20) == BUSY
        assert get_slot(week, DayOfWeek.SATURDAY, 21) == BUSY
        assert get_slot(week, DayOfWeek.SATURDAY, 22) == FREE

    def test_range_clipped_to_day(self):
        week = decode([
            {"day": "MONDAY", "type": "QUIET", "startTime": "2025-11-24T22:00:00.000Z", "endTime": "2025-11-25T06:00:00.000Z"}
        ])
        assert day_states(week, DayOfWeek.MONDAY)[22:] == (QUIET, QUIET)
        assert day_states(week, DayOfWeek.TUESDAY) == (FREE,) * 24

    def test_later_block_wins_on_overlap(self):
        blocks = [
            {"day": "WEDNESDAY", "type": "BUSY", "startTime": "2025-11-26T08:00:00.000Z", "endTime": "2025-11-26T12:00:00.000Z"},
            {"day": "WEDNESDAY", "type": "QUIET", "startTime": "2025-11-26T10:00:00.000Z", "endTime": "2025-11-26T11:00:00.000Z"},
        ]
        week = decode(blocks)
        assert get_slot(week, DayOfWeek.WEDNESDAY, 9) == BUSY
        assert get_slot(week, DayOfWeek.WEDNESDAY, 10) == QUIET
        assert get_slot(week, DayOfWeek.WEDNESDAY, 11) == BUSY

        reversed_week = decode(list(reversed(blocks)))
        assert get_slot(reversed_week, DayOfWeek.WEDNESDAY, 10) == BUSY

    def test_skips_block_with_unknown_day(self, log_records):
        """A single malformed record is skipped with one warning; the rest still decode."""
        blocks = [
            {"day": "MONDAY", "type": "QUIET", "startTime": "2025-11-24T00:00:00.000Z", "endTime": "2025-11-24T07:00:00.000Z"},
            {"day": "FUNDAY", "type": "BUSY", "startTime": "2025-11-25T09:00:00.000Z", "endTime": "2025-11-25T17:00:00.000Z"},
            {"day": "TUESDAY", "type": "BUSY", "startTime": "2025-11-25T09:00:00.000Z", "endTime": "2025-11-25T17:00:00.000Z"},
        ]
        week = decode(blocks)
        assert get_slot(week, DayOfWeek.MONDAY, 6) == QUIET
        assert get_slot(week, DayOfWeek.TUESDAY, 9) == BUSY
        warnings = [r for r in log_records if r["level"].name == "WARNING"]
        assert len(warnings) == 1
        assert "FUNDAY" in warnings[0]["message"]

    @pytest.mark.parametrize(
        "bad",
        [
            {"type": "BUSY", "startTime": "not-a-timestamp", "endTime": "2025-11-24T10:00:00.000Z"},
            {"day": "MONDAY", "type": "SLEEP", "startTime": "2025-11-24T09:00:00.000Z", "endTime": "2025-11-24T10:00:00.000Z"},
            {"day": "MONDAY", "type": "BUSY"},
            "MONDAY 9-10 BUSY",
        ],
    )
    def test_skips_unparseable_blocks(self, bad, log_records):
        good = {"day": "MONDAY", "type": "BUSY", "startTime": "2025-11-24T12:00:00.000Z", "endTime": "2025-11-24T13:00:00.000Z"}
        week = decode([bad, good])
        assert get_slot(week, DayOfWeek.MONDAY, 12) == BUSY
        assert len([r for r in log_records if r["level"].name == "WARNING"]) == 1

    def test_resolve_day_raises_for_unknown_day(self):
        block = WireTimeBlock(day="NOPE", type="FREE", start_time="2025-11-24T00:00:00.000Z", end_time="2025-11-25T00:00:00.000Z")
        with pytest.raises(MalformedBlockError):
            resolve_day(block)
