"""Conversion of a timeline into the flat cue list an audio player consumes.

Each shot yields an announcement, an optional split-step cue and a closing
beep. Each message yields its speech, optional countdown beeps, or a silent
marker when there is nothing to say. Cues are sorted by time and a final
completion announcement is appended.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum, auto

from ghosting_engine.models.enums import (
    COMPLETION_ANNOUNCEMENT,
    COUNTDOWN_BEEP_OFFSET_S,
    DEFAULT_SPEECH_RATE,
    DEFAULT_VOICE,
    MAX_SPOKEN_COUNTDOWN,
    SplitStepSpeed,
)
from ghosting_engine.models.timeline import TimelineEvent


class SoundKind(IntEnum):
    """Kind of cue the player has to render."""

    TTS = auto()
    BEEP = auto()
    SPLIT_STEP = auto()
    SILENT = auto()


@dataclass(frozen=True)
class SoundEvent:
    """One audio cue at an absolute time in seconds."""

    kind: SoundKind
    time: float
    text: str = ""
    voice: str = DEFAULT_VOICE
    speech_rate: float = DEFAULT_SPEECH_RATE
    speed: SplitStepSpeed | None = None
    countdown_number: int | None = None
    entry_id: str = ""
    is_completion: bool = False


def to_sound_events(events: Sequence[TimelineEvent]) -> list[SoundEvent]:
    """Flatten *events* into time-sorted cues plus a completion announcement."""
    cues: list[SoundEvent] = []
    for event in events:
        if event.is_shot:
            cues.extend(_shot_cues(event))
        else:
            cues.extend(_message_cues(event))

    cues.sort(key=lambda cue: cue.time)

    if events:
        last = events[-1]
        cues.append(
            SoundEvent(
                kind=SoundKind.TTS,
                time=last.end_time or last.start_time,
                text=COMPLETION_ANNOUNCEMENT,
                is_completion=True,
            )
        )
    return cues


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _shot_cues(event: TimelineEvent) -> list[SoundEvent]:
    cues = []
    subs = event.sub_events
    if "announced_time" in subs and event.name.strip():
        cues.append(
            SoundEvent(
                kind=SoundKind.TTS,
                time=subs["announced_time"],
                text=event.name,
                voice=event.config.voice,
                speech_rate=event.config.speech_rate,
                entry_id=event.entry_id,
            )
        )
    if "split_step_time" in subs:
        cues.append(
            SoundEvent(
                kind=SoundKind.SPLIT_STEP,
                time=subs["split_step_time"],
                speed=event.split_step_speed,
                entry_id=event.entry_id,
            )
        )
    if "beep_time" in subs:
        cues.append(SoundEvent(kind=SoundKind.BEEP, time=subs["beep_time"], entry_id=event.entry_id))
    return cues


def _message_cues(event: TimelineEvent) -> list[SoundEvent]:
    subs = event.sub_events
    if "message_start" not in subs:
        return []

    config = event.config
    text = event.message_text.strip()
    start = subs["message_start"]
    cues = []

    if text:
        cues.append(
            SoundEvent(
                kind=SoundKind.TTS,
                time=start,
                text=event.message_text,
                voice=config.voice,
                speech_rate=config.speech_rate,
                entry_id=event.entry_id,
            )
        )

    if config.countdown:
        # Countdown starts on the first whole second after speech ends.
        countdown_start = math.ceil(subs.get("tts_end", start))
        remaining = math.floor(event.end_time - countdown_start)
        count = min(remaining, math.floor(config.interval))
        if text:
            count = min(count, MAX_SPOKEN_COUNTDOWN)
        for number in range(count, 0, -1):
            cues.append(
                SoundEvent(
                    kind=SoundKind.BEEP,
                    time=event.end_time - number + COUNTDOWN_BEEP_OFFSET_S,
                    countdown_number=number,
                    entry_id=event.entry_id,
                )
            )
    elif not text:
        cues.append(SoundEvent(kind=SoundKind.SILENT, time=start, entry_id=event.entry_id))

    return cues
