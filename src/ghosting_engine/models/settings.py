"""Engine tunables."""

from __future__ import annotations

from dataclasses import dataclass

from ghosting_engine.models.enums import MAX_EVENTS, MAX_NO_PROGRESS, MAX_SELECTION_LOOPS


@dataclass(frozen=True)
class GenerationSettings:
    """Safety bounds for one generation run.

    Attributes:
        max_events: Main-loop iterations allowed before the run is aborted
            with TimelineGenerationError.
        max_no_progress: Consecutive iterations without a time advance
            before the run stops early and returns the partial timeline.
        max_selection_loops: Attempts to pick the next entry per iteration.
    """

    max_events: int = MAX_EVENTS
    max_no_progress: int = MAX_NO_PROGRESS
    max_selection_loops: int = MAX_SELECTION_LOOPS
