"""Interval, speech and sub-event timing for shots and messages.

All functions are pure. Randomness comes in through a ``draw`` callable
returning a float in ``[0, 1]`` so that the caller decides whether a draw is
seeded.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass

from ghosting_engine.models.config import EffectiveConfig, IntervalOffset
from ghosting_engine.models.enums import (
    AUTO_SCALE_FAST_MAX_INTERVAL_S,
    AUTO_SCALE_MEDIUM_MAX_INTERVAL_S,
    SPLIT_STEP_DURATION_S,
    TTS_WORDS_PER_MINUTE,
    IntervalOffsetType,
    IntervalType,
    SplitStepSpeed,
)
from ghosting_engine.timing.randomness import SeededRandom

Draw = Callable[[], float]


def effective_interval(
    base: float,
    offset: IntervalOffset | None,
    offset_type: IntervalOffsetType,
    draw: Draw = random.random,
) -> float:
    """Base interval plus its configured offset.

    Args:
        base: Base interval in seconds.
        offset: Offset range, or None for no offset.
        offset_type: FIXED adds ``offset.min``; RANDOM adds a uniform draw
            from ``[offset.min, offset.max]``.
        draw: Source of the random fraction for RANDOM offsets.

    Returns:
        Effective interval in seconds. A negative or non-numeric base yields 0.
    """
    if isinstance(base, bool) or not isinstance(base, (int, float)) or base < 0:
        return 0.0
    if offset is None:
        return float(base)
    if offset_type == IntervalOffsetType.FIXED:
        return base + offset.min
    if offset_type == IntervalOffsetType.RANDOM:
        return base + offset.min + draw() * (offset.max - offset.min)
    return float(base)


def tts_duration(text: str, speech_rate: float = 1.0) -> float:
    """Estimated speaking time for *text* at ``TTS_WORDS_PER_MINUTE``."""
    words = len(text.split()) if text else 0
    if words == 0:
        return 0.0
    rate = speech_rate if speech_rate > 0 else 1.0
    return words / TTS_WORDS_PER_MINUTE * 60.0 / rate


def auto_scale_split_step(interval: float) -> SplitStepSpeed:
    """Shorter intervals get a faster split-step cue."""
    if interval <= AUTO_SCALE_FAST_MAX_INTERVAL_S:
        return SplitStepSpeed.FAST
    if interval <= AUTO_SCALE_MEDIUM_MAX_INTERVAL_S:
        return SplitStepSpeed.MEDIUM
    return SplitStepSpeed.SLOW


def resolve_split_step_speed(
    speed: SplitStepSpeed, interval: float, draw: Draw
) -> SplitStepSpeed:
    """Resolve AUTO_SCALE and RANDOM to a concrete fast/medium/slow speed.

    NONE and the concrete speeds pass through unchanged.
    """
    if speed == SplitStepSpeed.AUTO_SCALE:
        return auto_scale_split_step(interval)
    if speed == SplitStepSpeed.RANDOM:
        roll = draw()
        if roll < 1 / 3:
            return SplitStepSpeed.FAST
        if roll < 2 / 3:
            return SplitStepSpeed.MEDIUM
        return SplitStepSpeed.SLOW
    return speed


def start_time_draw(start_time: float) -> Draw:
    """Fallback draw for unseeded runs, keyed on the event start time."""
    return SeededRandom(int(start_time * 1000)).random


@dataclass(frozen=True)
class ShotTiming:
    start_time: float
    end_time: float
    duration: float
    sub_events: dict[str, float]
    split_step_speed: SplitStepSpeed


def shot_timing(
    config: EffectiveConfig, start_time: float, interval: float, draw: Draw | None = None
) -> ShotTiming:
    """Lay out one shot that starts at *start_time* and lasts *interval*.

    Sub-events are absolute: the beep closes the shot, the announcement comes
    ``shot_announcement_lead_time`` earlier, and the split-step cue precedes
    the beep by the duration of the resolved speed.
    """
    end_time = start_time + interval
    sub_events = {
        "beep_time": end_time,
        "announced_time": end_time - config.shot_announcement_lead_time,
    }
    speed = resolve_split_step_speed(
        config.split_step_speed, interval, draw or start_time_draw(start_time)
    )
    if speed != SplitStepSpeed.NONE:
        sub_events["split_step_time"] = end_time - SPLIT_STEP_DURATION_S[speed]
    return ShotTiming(
        start_time=start_time,
        end_time=end_time,
        duration=interval,
        sub_events=sub_events,
        split_step_speed=speed,
    )


@dataclass(frozen=True)
class MessageTiming:
    start_time: float
    end_time: float
    duration: float
    tts_duration: float
    sub_events: dict[str, float]


def message_duration(tts: float, interval: float, interval_type: IntervalType) -> float:
    if interval_type == IntervalType.ADDITIONAL:
        return tts + interval
    return max(tts, interval)


def message_timing(
    text: str, config: EffectiveConfig, start_time: float, interval: float
) -> MessageTiming:
    """Lay out one message: speech first, then the rest of its interval."""
    tts = tts_duration(text, config.speech_rate)
    duration = message_duration(tts, interval, config.interval_type)
    end_time = start_time + duration
    return MessageTiming(
        start_time=start_time,
        end_time=end_time,
        duration=duration,
        tts_duration=tts,
        sub_events={
            "message_start": start_time,
            "tts_end": start_time + tts,
            "message_end": end_time,
        },
    )
