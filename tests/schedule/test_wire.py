"""Tests for JSON wire serialization and source precedence."""

import json

import pytest

from chore_schedule.schedule.codec import decode, encode
from chore_schedule.schedule.errors import MalformedBlockError
from chore_schedule.schedule.types import ScheduleSource, WireTimeBlock
from chore_schedule.schedule.wire import dump_blocks, dumps_blocks, loads_payload, order_by_precedence, source_of


class TestSerialization:
    def test_dump_uses_wire_keys(self, workday_week, week_start_date):
        first = dump_blocks(encode(workday_week, week_start_date))[0]
        assert first == {
            "day": "MONDAY",
            "type": "QUIET",
            "startTime": "2025-11-24T00:00:00.000Z",
            "endTime": "2025-11-24T08:00:00.000Z",
        }

    def test_json_round_trip(self, workday_week, week_start_date):
        payload = dumps_blocks(encode(workday_week, week_start_date))
        assert isinstance(json.loads(payload), list)
        assert decode(loads_payload(payload)) == workday_week

    def test_response_metadata_is_kept(self):
        block = WireTimeBlock.model_validate(
            {
                "id": "b-1",
                "dayOfWeek": "MONDAY",
                "type": "TASK",
                "startTime": "2025-11-24T09:00:00.000Z",
                "endTime": "2025-11-24T10:00:00.000Z",
                "status": "ACTIVE",
                "userId": "u-1",
                "roomTaskId": "dishes",
                "roomTask": {"title": "Dishes"},
                "difficulty": 2,
            }
        )
        assert block.day == "MONDAY"
        assert block.room_task_id == "dishes"
        assert dump_blocks([block])[0]["roomTaskId"] == "dishes"
        assert "roomTask" not in dump_blocks([block])[0]

    @pytest.mark.parametrize("payload", ["{not json", '{"day": "MONDAY"}', "42"])
    def test_loads_rejects_non_array(self, payload):
        with pytest.raises(MalformedBlockError):
            loads_payload(payload)


class TestPrecedence:
    def test_source_of(self):
        assert source_of({"status": "ACTIVE"}) == ScheduleSource.ACTIVE
        assert source_of({"status": "TEMPORARY"}) == ScheduleSource.TEMPORARY
        assert source_of({"id": "h-1"}) == ScheduleSource.HISTORY
        assert source_of("garbage") == ScheduleSource.HISTORY

    def test_order_is_active_pending_history_and_stable(self):
        blocks = [
            {"id": "h1"},
            {"id": "t1", "status": "TEMPORARY"},
            {"id": "a1", "status": "ACTIVE"},
            {"id": "h2"},
            {"id": "a2", "status": "ACTIVE"},
        ]
        assert [b["id"] for b in order_by_precedence(blocks)] == ["a1", "a2", "t1", "h1", "h2"]
