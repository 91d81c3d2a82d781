"""Workout document loading and normalization.

Turns a parsed workout JSON document into the frozen model tree. This is the
single place where legacy shapes are accepted:

- ``iteration`` is renamed to ``iterationType``;
- limit type ``all-entries`` becomes ``all-shots``;
- limit values and intervals written as ``"MM:SS"``, ``"30s"`` or ``"30"``
  become seconds;
- every ``repeatCount`` shape becomes a RepeatSpec;
- ``positionType`` strings become PositionLock values.

Structural validation beyond what is needed to build the tree is out of
scope; missing optional fields fall back to defaults.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from ghosting_engine.exceptions import WorkoutLoadError
from ghosting_engine.models.config import Limits, PositionLock, parse_repeat_count
from ghosting_engine.models.workout import Entry, Message, Pattern, Shot, Workout
from ghosting_engine.timing.clock import parse_time_limit


def load_workout(data: Any) -> Workout:
    """Build a Workout from a parsed JSON document.

    Raises:
        WorkoutLoadError: If *data* is not a workout document or a pattern
            or entry is not an object.
    """
    if not isinstance(data, Mapping):
        raise WorkoutLoadError("Workout data must be an object")
    if data.get("type") != "Workout":
        raise WorkoutLoadError('Workout type must be "Workout"', field="type")

    raw_patterns = data.get("patterns") or []
    if not isinstance(raw_patterns, list):
        raise WorkoutLoadError("Workout patterns must be a list", field="patterns")

    config = _normalize_config(data.get("config"), "config")
    patterns = tuple(
        _load_pattern(raw, f"patterns[{i}]") for i, raw in enumerate(raw_patterns)
    )
    return Workout(
        name=_text(data.get("name")),
        patterns=patterns,
        config=MappingProxyType(config),
        limits=Limits.from_config(config),
    )


def load_workout_file(path: str | Path) -> Workout:
    """Read and load a workout JSON file."""
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise WorkoutLoadError(f"{path}: invalid JSON ({exc})") from exc
    return load_workout(data)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_pattern(raw: Any, where: str) -> Pattern:
    if not isinstance(raw, Mapping):
        raise WorkoutLoadError(f"{where} must be an object", field=where)

    raw_entries = raw.get("entries") or []
    if not isinstance(raw_entries, list):
        raise WorkoutLoadError(f"{where}.entries must be a list", field=f"{where}.entries")

    config = _normalize_config(raw.get("config"), f"{where}.config")
    return Pattern(
        id=_text(raw.get("id")),
        name=_text(raw.get("name")),
        entries=tuple(
            _load_entry(entry, f"{where}.entries[{i}]") for i, entry in enumerate(raw_entries)
        ),
        config=MappingProxyType(config),
        position=PositionLock.parse(raw.get("positionType")),
        repeat=parse_repeat_count(config.get("repeatCount")),
        limits=Limits.from_config(config),
    )


def _load_entry(raw: Any, where: str) -> Entry:
    if not isinstance(raw, Mapping):
        raise WorkoutLoadError(f"{where} must be an object", field=where)

    config = _normalize_config(raw.get("config"), f"{where}.config")
    common = {
        "id": _text(raw.get("id")),
        "name": _text(raw.get("name")),
        "config": MappingProxyType(config),
        "position": PositionLock.parse(raw.get("positionType")),
    }
    if raw.get("type") == "Message":
        return Message(**common)
    return Shot(**common, repeat=parse_repeat_count(config.get("repeatCount")))


def _normalize_config(raw: Any, where: str) -> dict[str, Any]:
    """Copy a raw config object, rewriting legacy fields in place."""
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise WorkoutLoadError(f"{where} must be an object", field=where)

    config = dict(raw)
    if "iteration" in config and "iterationType" not in config:
        config["iterationType"] = config.pop("iteration")

    interval = config.get("interval")
    if isinstance(interval, str):
        seconds = parse_time_limit(interval)
        if isinstance(seconds, float):
            config["interval"] = seconds

    limits = config.get("limits")
    if isinstance(limits, Mapping):
        limits = dict(limits)
        if limits.get("type") == "all-entries":
            limits["type"] = "all-shots"
        if isinstance(limits.get("value"), str):
            limits["value"] = parse_time_limit(limits["value"])
        config["limits"] = limits

    return config


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""
