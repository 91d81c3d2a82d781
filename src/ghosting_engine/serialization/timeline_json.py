"""Timeline JSON serialization.

Events are written with the camelCase keys players and preview tools expect.
All times are rounded to two decimal places on the way out. All functions
are pure (no I/O).
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from ghosting_engine.models.enums import (
    ENTRY_TYPE_KEYS,
    SPLIT_STEP_SPEED_KEYS,
    SPLIT_STEP_SPEEDS,
    EntryType,
)
from ghosting_engine.models.timeline import RepeatMetadata, TimelineEvent

# Wire key → EntryType
_ENTRY_TYPES = {key: entry_type for entry_type, key in ENTRY_TYPE_KEYS.items()}

# RepeatMetadata field → wire key
_REPEAT_KEYS = {
    "superset_number": "supersetNumber",
    "pattern_repeat_number": "patternRepeatNumber",
    "shot_repeat_number": "shotRepeatNumber",
    "total_pattern_repeats": "totalPatternRepeats",
    "total_shot_repeats": "totalShotRepeats",
}


def to_timeline_json(events: Sequence[TimelineEvent]) -> list[dict]:
    """Convert events to a list of JSON-ready dicts."""
    return [_event_to_dict(event) for event in events]


def to_timeline_json_string(events: Sequence[TimelineEvent], indent: int = 2) -> str:
    """Convert events to a JSON string."""
    return json.dumps(to_timeline_json(events), indent=indent)


def from_timeline_json(data: Sequence[Mapping[str, Any]]) -> list[TimelineEvent]:
    """Rebuild events from ``to_timeline_json`` output.

    The effective config is not part of the wire format, so rebuilt events
    carry default configs.

    Raises:
        ValueError: If *data* is not a list of event objects.
    """
    if not isinstance(data, list):
        raise ValueError("Timeline JSON must be a list")
    return [_event_from_dict(item) for item in data]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _round(value: float) -> float:
    return round(value, 2)


def _event_to_dict(event: TimelineEvent) -> dict:
    result = {
        "name": event.name,
        "type": ENTRY_TYPE_KEYS[event.event_type],
        "id": event.entry_id,
        "startTime": _round(event.start_time),
        "endTime": _round(event.end_time),
        "duration": _round(event.duration),
        "subEvents": {key: _round(value) for key, value in event.sub_events.items()},
        "repeatMetadata": {
            wire: getattr(event.repeat, attr) for attr, wire in _REPEAT_KEYS.items()
        },
    }
    if event.pattern_id or event.pattern_name:
        result["pattern"] = {"id": event.pattern_id, "name": event.pattern_name}
    if event.event_type == EntryType.MESSAGE:
        result["message"] = event.message_text
    if event.split_step_speed is not None:
        result["splitStepSpeed"] = SPLIT_STEP_SPEED_KEYS[event.split_step_speed]
    return result


def _event_from_dict(data: Mapping[str, Any]) -> TimelineEvent:
    if not isinstance(data, Mapping):
        raise ValueError("Timeline events must be objects")
    repeat = data.get("repeatMetadata") or {}
    pattern = data.get("pattern") or {}
    speed = data.get("splitStepSpeed")
    return TimelineEvent(
        name=data.get("name") or "",
        event_type=_ENTRY_TYPES.get(data.get("type"), EntryType.SHOT),
        entry_id=data.get("id") or "",
        start_time=float(data["startTime"]),
        end_time=float(data["endTime"]),
        duration=float(data["duration"]),
        sub_events={key: float(value) for key, value in (data.get("subEvents") or {}).items()},
        repeat=RepeatMetadata(
            **{attr: int(repeat.get(wire, 1)) for attr, wire in _REPEAT_KEYS.items()}
        ),
        pattern_id=pattern.get("id") or "",
        pattern_name=pattern.get("name") or "",
        message_text=data.get("message") or "",
        split_step_speed=SPLIT_STEP_SPEEDS.get(speed) if speed else None,
    )
