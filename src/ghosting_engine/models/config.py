"""Normalized configuration values: position locks, repeat specs, limits.

Raw workout documents carry these as loosely shaped JSON values. The loader
collapses every accepted shape into the tagged types below so that the
engine never has to sniff shapes at generation time.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from ghosting_engine.models.enums import (
    DEFAULT_ANNOUNCEMENT_LEAD_TIME_S,
    DEFAULT_INTERVAL_S,
    DEFAULT_SPEECH_RATE,
    DEFAULT_VOICE,
    INTERVAL_OFFSET_TYPES,
    INTERVAL_TYPES,
    ITERATION_TYPES,
    LIMIT_TYPES,
    SPLIT_STEP_SPEEDS,
    IntervalOffsetType,
    IntervalType,
    IterationType,
    LimitType,
    PositionKind,
    SplitStepSpeed,
)


def _as_float(value: Any, default: float) -> float:
    """Coerce a numeric config value, falling back to *default*."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


@dataclass(frozen=True)
class PositionLock:
    """Positional constraint for an entry.

    ``slot`` is only set for FIXED locks and is 1-based.
    """

    kind: PositionKind = PositionKind.NORMAL
    slot: int | None = None

    @classmethod
    def parse(cls, raw: Any) -> PositionLock:
        """Parse ``"normal" | "linked" | "last" | "<digits>"``.

        Unknown values fall back to NORMAL.
        """
        if isinstance(raw, PositionLock):
            return raw
        if isinstance(raw, int) and not isinstance(raw, bool):
            return cls(PositionKind.FIXED, raw) if raw > 0 else cls()
        if not isinstance(raw, str):
            return cls()
        text = raw.strip().lower()
        if text == "linked":
            return cls(PositionKind.LINKED)
        if text == "last":
            return cls(PositionKind.LAST)
        if text.isdigit() and int(text) > 0:
            return cls(PositionKind.FIXED, int(text))
        return cls()

    @property
    def is_linked(self) -> bool:
        return self.kind == PositionKind.LINKED

    @property
    def is_last(self) -> bool:
        return self.kind == PositionKind.LAST

    def is_slot(self, slot: int) -> bool:
        """True when this lock pins the entry to *slot*."""
        return self.kind == PositionKind.FIXED and self.slot == slot

    def to_wire(self) -> str:
        if self.kind == PositionKind.FIXED:
            return str(self.slot)
        return self.kind.name.lower()


@dataclass(frozen=True)
class FixedRepeat:
    """Play an entry (or pattern) exactly ``count`` times."""

    count: int = 1


@dataclass(frozen=True)
class RandomRepeat:
    """Play an entry a random number of times in ``[min_count, max_count]``."""

    min_count: int = 0
    max_count: int = 0


RepeatSpec = Union[FixedRepeat, RandomRepeat]


def parse_repeat_count(raw: Any) -> RepeatSpec | None:
    """Collapse every accepted ``repeatCount`` shape into a RepeatSpec.

    Accepted shapes:
        * bare number -> FixedRepeat
        * ``{"type": "fixed", "count": n}`` -> FixedRepeat
        * ``{"type": "random", "min": a, "max": b}`` -> RandomRepeat
        * legacy ``{"min": a, "max": b}`` without a type -> RandomRepeat

    Returns None when nothing is configured. Anything else is treated as a
    single play.
    """
    if raw is None:
        return None
    if isinstance(raw, (FixedRepeat, RandomRepeat)):
        return raw
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return FixedRepeat(max(1, int(raw)))
    if isinstance(raw, Mapping):
        kind = raw.get("type")
        if kind == "fixed":
            return FixedRepeat(max(1, _as_int(raw.get("count"), 1)))
        if kind == "random" or kind is None:
            low = _as_int(raw.get("min"), 0)
            high = _as_int(raw.get("max"), low)
            return RandomRepeat(low, high)
    return FixedRepeat(1)


@dataclass(frozen=True)
class IntervalOffset:
    """Offset range added to a base interval, seconds."""

    min: float = 0.0
    max: float = 0.0

    @classmethod
    def from_mapping(cls, raw: Any) -> IntervalOffset | None:
        if not isinstance(raw, Mapping):
            return None
        low = _as_float(raw.get("min"), 0.0)
        return cls(min=low, max=_as_float(raw.get("max"), low))


@dataclass(frozen=True)
class Limits:
    """Pattern- or workout-level termination rule.

    ``value`` is a shot count for SHOT_LIMIT and seconds for TIME_LIMIT.
    """

    type: LimitType = LimitType.ALL_SHOTS
    value: float | None = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> Limits:
        """Read the ``limits`` block of a single (non-merged) config.

        A shot or time limit without a usable value behaves as all-shots.
        """
        raw = (config or {}).get("limits")
        if not isinstance(raw, Mapping):
            return cls()
        limit_type = LIMIT_TYPES.get(raw.get("type"), LimitType.ALL_SHOTS)
        value = raw.get("value")
        if limit_type == LimitType.ALL_SHOTS:
            return cls()
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return cls()
        return cls(type=limit_type, value=float(value))

    @property
    def is_capped(self) -> bool:
        return self.type != LimitType.ALL_SHOTS


@dataclass(frozen=True)
class EffectiveConfig:
    """Fully resolved config for one entry after workout→pattern→entry merge."""

    interval: float = DEFAULT_INTERVAL_S
    interval_offset: IntervalOffset | None = None
    interval_offset_type: IntervalOffsetType = IntervalOffsetType.FIXED
    shot_announcement_lead_time: float = DEFAULT_ANNOUNCEMENT_LEAD_TIME_S
    split_step_speed: SplitStepSpeed = SplitStepSpeed.AUTO_SCALE
    iteration_type: IterationType = IterationType.IN_ORDER
    voice: str = DEFAULT_VOICE
    speech_rate: float = DEFAULT_SPEECH_RATE
    message: str = ""
    interval_type: IntervalType = IntervalType.FIXED
    countdown: bool = False
    skip_at_end_of_workout: bool = False

    @classmethod
    def from_mapping(cls, merged: Mapping[str, Any]) -> EffectiveConfig:
        """Build from a merged raw config, applying lenient defaults."""
        speech_rate = _as_float(merged.get("speechRate"), DEFAULT_SPEECH_RATE)
        if speech_rate <= 0:
            speech_rate = DEFAULT_SPEECH_RATE
        message = merged.get("message")
        voice = merged.get("voice")
        return cls(
            interval=_as_float(merged.get("interval"), DEFAULT_INTERVAL_S),
            interval_offset=IntervalOffset.from_mapping(merged.get("intervalOffset")),
            interval_offset_type=INTERVAL_OFFSET_TYPES.get(
                merged.get("intervalOffsetType"), IntervalOffsetType.FIXED,
            ),
            shot_announcement_lead_time=_as_float(
                merged.get("shotAnnouncementLeadTime"), DEFAULT_ANNOUNCEMENT_LEAD_TIME_S,
            ),
            split_step_speed=SPLIT_STEP_SPEEDS.get(
                merged.get("splitStepSpeed"), SplitStepSpeed.AUTO_SCALE,
            ),
            iteration_type=ITERATION_TYPES.get(
                merged.get("iterationType"), IterationType.IN_ORDER,
            ),
            voice=voice if isinstance(voice, str) and voice else DEFAULT_VOICE,
            speech_rate=speech_rate,
            message=message if isinstance(message, str) else "",
            interval_type=INTERVAL_TYPES.get(merged.get("intervalType"), IntervalType.FIXED),
            countdown=merged.get("countdown") is True,
            skip_at_end_of_workout=merged.get("skipAtEndOfWorkout") is True,
        )
