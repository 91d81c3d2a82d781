"""Timeline output: events, repeat metadata and the generation trace."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ghosting_engine.models.config import EffectiveConfig
from ghosting_engine.models.enums import EntryType, SplitStepSpeed, TerminationReason


@dataclass(frozen=True)
class RepeatMetadata:
    """Where an event sits in the superset / pattern run / shot repeat nest.

    All counters are 1-based.
    """

    superset_number: int = 1
    pattern_repeat_number: int = 1
    shot_repeat_number: int = 1
    total_pattern_repeats: int = 1
    total_shot_repeats: int = 1


@dataclass(frozen=True)
class TimelineEvent:
    """One scheduled shot or message, in absolute seconds from workout start.

    ``sub_events`` holds named absolute offsets: ``announced_time``,
    ``beep_time`` and ``split_step_time`` for shots; ``message_start``,
    ``tts_end`` and ``message_end`` for messages.
    """

    name: str
    event_type: EntryType
    entry_id: str
    start_time: float
    end_time: float
    duration: float
    sub_events: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    repeat: RepeatMetadata = field(default_factory=RepeatMetadata)
    pattern_id: str = ""
    pattern_name: str = ""
    message_text: str = ""
    split_step_speed: SplitStepSpeed | None = None
    config: EffectiveConfig = field(default_factory=EffectiveConfig, compare=False, repr=False)

    @property
    def is_shot(self) -> bool:
        return self.event_type == EntryType.SHOT

    @property
    def is_message(self) -> bool:
        return self.event_type == EntryType.MESSAGE


@dataclass(frozen=True)
class GenerationTrace:
    """Summary of how a generation run ended.

    Callers should treat a timeline whose termination is NO_PROGRESS as
    truncated.
    """

    termination: TerminationReason
    supersets_started: int = 1
    events_generated: int = 0
    entries_skipped: int = 0
    total_shots: int = 0
    total_time: float = 0.0

    @property
    def truncated(self) -> bool:
        return self.termination == TerminationReason.NO_PROGRESS
