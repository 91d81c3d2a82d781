"""Mutable per-run generator state."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from ghosting_engine.models.timeline import TimelineEvent


@dataclass
class GeneratorState:
    """Everything the scheduler mutates during one ``run()``.

    Created fresh for every generation call and never shared.
    """

    current_time: float = 0.0
    total_shots: int = 0
    superset: int = 1
    pattern_index: int = 0
    pattern_order: list[int] | None = None  # set when patterns are shuffled
    pattern_order_index: int = 0
    pending: deque[TimelineEvent] = field(default_factory=deque)
    pattern_repeats: dict[tuple[int, int], int] = field(default_factory=dict)
    events_generated: int = 0
    shots_processed: int = 0
    entries_skipped: int = 0

    @property
    def total_time(self) -> float:
        return self.current_time

    def current_pattern_index(self) -> int:
        """Index into ``workout.patterns`` of the active pattern."""
        if self.pattern_order is not None:
            return self.pattern_order[self.pattern_order_index]
        return self.pattern_index
