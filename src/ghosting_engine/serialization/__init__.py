"""Serialization module — export timelines for players and preview tools."""

from ghosting_engine.serialization.sound_events import SoundEvent, SoundKind, to_sound_events
from ghosting_engine.serialization.timeline_json import (
    from_timeline_json,
    to_timeline_json,
    to_timeline_json_string,
)

__all__ = [
    "SoundEvent",
    "SoundKind",
    "from_timeline_json",
    "to_sound_events",
    "to_timeline_json",
    "to_timeline_json_string",
]
