"""Timeline statistics: totals, work/rest split and timing consistency.

A timeline is small (at most a few thousand events), but the reporting layer
works on it as a table: ``timeline_to_frame`` gives a pandas DataFrame and
the aggregate helpers reduce numpy arrays taken from the events.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from ghosting_engine.models.enums import ENTRY_TYPE_KEYS, EntryType
from ghosting_engine.models.timeline import TimelineEvent

_FRAME_COLUMNS = [
    "name",
    "type",
    "id",
    "pattern",
    "start_time",
    "end_time",
    "duration",
    "superset",
    "pattern_repeat",
    "shot_repeat",
]


@dataclass(frozen=True)
class TimelineStats:
    """Aggregate figures for one generated timeline.

    ``total_duration`` is the latest end time, not the sum of durations.
    """

    total_events: int = 0
    total_duration: float = 0.0
    total_shots: int = 0
    total_messages: int = 0
    event_types: dict[str, int] = field(default_factory=dict)
    average_shot_interval: float = 0.0


@dataclass(frozen=True)
class WorkRestRatio:
    """Shot time versus message time. ``ratio`` is None without rest."""

    work_time: float
    rest_time: float
    ratio: float | None

    @property
    def has_rest(self) -> bool:
        return self.rest_time > 0


@dataclass(frozen=True)
class TimingIssue:
    """An event that ends after the following event starts."""

    event_index: int
    current_end: float
    next_start: float

    @property
    def message(self) -> str:
        return f"Event {self.event_index} ends after event {self.event_index + 1} starts"


def calculate_timeline_stats(events: Sequence[TimelineEvent]) -> TimelineStats:
    """Count events by type and measure the timeline's length."""
    if not events:
        return TimelineStats()

    end_times = np.array([e.end_time for e in events], dtype=np.float64)
    shot_durations = np.array([e.duration for e in events if e.is_shot], dtype=np.float64)

    event_types: dict[str, int] = {}
    for event in events:
        key = ENTRY_TYPE_KEYS[event.event_type]
        event_types[key] = event_types.get(key, 0) + 1

    return TimelineStats(
        total_events=len(events),
        total_duration=float(np.max(end_times)),
        total_shots=int(shot_durations.size),
        total_messages=len(events) - int(shot_durations.size),
        event_types=event_types,
        average_shot_interval=float(np.mean(shot_durations)) if shot_durations.size else 0.0,
    )


def calculate_work_rest_ratio(events: Sequence[TimelineEvent]) -> WorkRestRatio:
    """Shot ("work") time over message ("rest") time."""
    durations = np.array([e.end_time - e.start_time for e in events], dtype=np.float64)
    is_shot = np.array([e.is_shot for e in events], dtype=bool)
    if durations.size == 0:
        return WorkRestRatio(work_time=0.0, rest_time=0.0, ratio=None)

    work = float(durations[is_shot].sum())
    rest = float(durations[~is_shot].sum())
    return WorkRestRatio(work_time=work, rest_time=rest, ratio=work / rest if rest > 0 else None)


def validate_timing_consistency(events: Sequence[TimelineEvent]) -> list[TimingIssue]:
    """Report every event that overlaps the next one."""
    return [
        TimingIssue(event_index=i, current_end=current.end_time, next_start=following.start_time)
        for i, (current, following) in enumerate(zip(events, events[1:]))
        if current.end_time > following.start_time
    ]


def timeline_to_frame(events: Sequence[TimelineEvent]) -> pd.DataFrame:
    """One row per event, for tabular reporting and CSV export."""
    rows = [
        {
            "name": e.name,
            "type": ENTRY_TYPE_KEYS[e.event_type],
            "id": e.entry_id,
            "pattern": e.pattern_name,
            "start_time": e.start_time,
            "end_time": e.end_time,
            "duration": e.duration,
            "superset": e.repeat.superset_number,
            "pattern_repeat": e.repeat.pattern_repeat_number,
            "shot_repeat": e.repeat.shot_repeat_number,
        }
        for e in events
    ]
    return pd.DataFrame(rows, columns=_FRAME_COLUMNS)


def shots_per_minute(events: Sequence[TimelineEvent]) -> float:
    """Shots per minute of shot ("work") time; 0 without shots."""
    split = calculate_work_rest_ratio(events)
    if split.work_time <= 0:
        return 0.0
    shots = sum(1 for e in events if e.event_type == EntryType.SHOT)
    return shots / split.work_time * 60.0
