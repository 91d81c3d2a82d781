"""Data models for the ghosting engine."""

from ghosting_engine.models.config import (
    EffectiveConfig,
    FixedRepeat,
    IntervalOffset,
    Limits,
    PositionLock,
    RandomRepeat,
    RepeatSpec,
    parse_repeat_count,
)
from ghosting_engine.models.enums import (
    EntryType,
    IntervalOffsetType,
    IntervalType,
    IterationType,
    LimitType,
    PositionKind,
    SplitStepSpeed,
    TerminationReason,
)
from ghosting_engine.models.settings import GenerationSettings
from ghosting_engine.models.state import GeneratorState
from ghosting_engine.models.timeline import GenerationTrace, RepeatMetadata, TimelineEvent
from ghosting_engine.models.workout import Entry, Message, Pattern, Shot, Workout

__all__ = [
    "EffectiveConfig",
    "Entry",
    "EntryType",
    "FixedRepeat",
    "GenerationSettings",
    "GenerationTrace",
    "GeneratorState",
    "IntervalOffset",
    "IntervalOffsetType",
    "IntervalType",
    "IterationType",
    "LimitType",
    "Limits",
    "Message",
    "Pattern",
    "PositionKind",
    "PositionLock",
    "RandomRepeat",
    "RepeatMetadata",
    "RepeatSpec",
    "Shot",
    "SplitStepSpeed",
    "TerminationReason",
    "TimelineEvent",
    "Workout",
    "parse_repeat_count",
]
