"""Shared test fixtures: workout documents and model factories."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from ghosting_engine.loader import load_workout
from ghosting_engine.models.config import EffectiveConfig
from ghosting_engine.models.enums import EntryType, SplitStepSpeed
from ghosting_engine.models.timeline import RepeatMetadata, TimelineEvent
from ghosting_engine.models.workout import Workout


@pytest.fixture
def workout_factory() -> Callable[..., Workout]:
    """Factory fixture: load a Workout from raw pattern dicts.

    Usage:
        workout_factory([pattern_dict, ...], limits={"type": "shot-limit", "value": 5})
    """

    def factory(patterns: list[dict], name: str = "Test Workout", **config: Any) -> Workout:
        return load_workout(
            {"type": "Workout", "name": name, "config": config, "patterns": patterns}
        )

    return factory


@pytest.fixture
def single_shot_triple_repeat() -> dict:
    """One pattern, one shot: 5 s interval, 2.5 s lead, played three times."""
    return {
        "type": "Workout",
        "name": "Triple",
        "config": {"limits": {"type": "all-shots"}},
        "patterns": [
            {
                "type": "Pattern",
                "id": "p1",
                "name": "Front court",
                "entries": [
                    {
                        "type": "Shot",
                        "id": "s1",
                        "name": "Front left",
                        "config": {
                            "interval": 5.0,
                            "shotAnnouncementLeadTime": 2.5,
                            "repeatCount": {"type": "fixed", "count": 3},
                        },
                    }
                ],
            }
        ],
    }


@pytest.fixture
def mixed_workout_data() -> dict:
    """Two patterns with a message, a linked pair and a tail-locked shot."""
    return {
        "type": "Workout",
        "name": "Mixed",
        "config": {"interval": 4.0, "splitStepSpeed": "none"},
        "patterns": [
            {
                "type": "Pattern",
                "id": "warmup",
                "name": "Warm-up",
                "entries": [
                    {
                        "type": "Message",
                        "id": "m1",
                        "name": "Intro",
                        "config": {"message": "Get ready to move", "interval": 3.0},
                    },
                    {"type": "Shot", "id": "a", "name": "Front left"},
                    {"type": "Shot", "id": "b", "name": "Back right", "positionType": "linked"},
                ],
            },
            {
                "type": "Pattern",
                "id": "main",
                "name": "Main",
                "config": {"iterationType": "shuffle"},
                "entries": [
                    {"type": "Shot", "id": "c", "name": "Volley left"},
                    {"type": "Shot", "id": "d", "name": "Volley right"},
                    {"type": "Shot", "id": "e", "name": "Tee", "positionType": "last"},
                ],
            },
        ],
    }


@pytest.fixture
def event_factory() -> Callable[..., TimelineEvent]:
    """Factory fixture for hand-built timeline events."""

    def factory(
        start: float,
        duration: float,
        event_type: EntryType = EntryType.SHOT,
        name: str = "Shot",
        **overrides: Any,
    ) -> TimelineEvent:
        end = start + duration
        if event_type == EntryType.SHOT:
            sub_events = {"beep_time": end, "announced_time": end - 2.5}
        else:
            sub_events = {"message_start": start, "tts_end": start, "message_end": end}
        defaults: dict[str, Any] = {
            "name": name,
            "event_type": event_type,
            "entry_id": name.lower(),
            "start_time": start,
            "end_time": end,
            "duration": duration,
            "sub_events": sub_events,
            "repeat": RepeatMetadata(),
            "split_step_speed": None,
            "config": EffectiveConfig(split_step_speed=SplitStepSpeed.NONE),
        }
        defaults.update(overrides)
        return TimelineEvent(**defaults)

    return factory
