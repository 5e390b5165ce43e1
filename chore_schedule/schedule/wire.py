"""JSON wire helpers for schedule block lists.

The wire payload is a JSON array of blocks:
    [{"day": "MONDAY", "type": "QUIET", "startTime": "...Z", "endTime": "...Z"}, ...]

Parsed payload items stay raw mappings so that decode can skip malformed
items one at a time instead of rejecting the whole payload.
"""

import json
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from chore_schedule.schedule.errors import MalformedBlockError
from chore_schedule.schedule.types import ScheduleSource, WireTimeBlock

_SOURCE_RANK: dict[ScheduleSource, int] = {
    ScheduleSource.ACTIVE: 0,
    ScheduleSource.TEMPORARY: 1,
    ScheduleSource.HISTORY: 2,
}


def dump_blocks(blocks: Iterable[WireTimeBlock]) -> list[dict[str, Any]]:
    return [block.model_dump(mode="json", by_alias=True, exclude_none=True) for block in blocks]


def dumps_blocks(blocks: Iterable[WireTimeBlock]) -> str:
    """Serialize blocks to the JSON array sent to the schedule API."""
    return json.dumps(dump_blocks(blocks))


def loads_payload(payload: str | bytes) -> list[Any]:
    """Parse a schedule API response body into raw block items.

    Raises:
        MalformedBlockError: If the payload is not a JSON array
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise MalformedBlockError(f"Schedule payload is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise MalformedBlockError(f"Schedule payload must be a JSON array, got {type(data).__name__}")
    return data


def source_of(block: WireTimeBlock | Mapping[str, Any]) -> ScheduleSource:
    """Return where a block came from; archived history blocks carry no status."""
    if isinstance(block, WireTimeBlock):
        status = block.status
    elif isinstance(block, Mapping):
        status = block.get("status")
    else:
        status = None
    if status == "ACTIVE":
        return ScheduleSource.ACTIVE
    if status == "TEMPORARY":
        return ScheduleSource.TEMPORARY
    return ScheduleSource.HISTORY


def order_by_precedence(
    blocks: Sequence[WireTimeBlock | Mapping[str, Any]],
) -> list[WireTimeBlock | Mapping[str, Any]]:
    """Stable-sort a daily union so later sources override earlier ones in decode.

    Order: ACTIVE, then TEMPORARY (the pending edit), then HISTORY (the
    archived record of what the day actually was). Relative order within a
    source is preserved.
    """
    return sorted(blocks, key=lambda block: _SOURCE_RANK[source_of(block)])
