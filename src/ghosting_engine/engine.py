"""TimelineEngine — the main entry point that turns workouts into timelines."""

from __future__ import annotations

import logging

from ghosting_engine.models.settings import GenerationSettings
from ghosting_engine.models.timeline import GenerationTrace, TimelineEvent
from ghosting_engine.models.workout import Workout
from ghosting_engine.reporting.stats import TimelineStats, calculate_timeline_stats
from ghosting_engine.scheduling.scheduler import WorkoutScheduler


class TimelineEngine:
    """Generates playback timelines for ghosting workouts.

    Usage:
        engine = TimelineEngine()
        events = engine.generate(workout, seed=7)
        events, trace = engine.generate_with_trace(workout)
    """

    def __init__(
        self,
        settings: GenerationSettings | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings or GenerationSettings()
        self._injected_logger = logger
        self.logger = logger or logging.getLogger(__name__)

    def generate(self, workout: Workout, seed: int | None = None) -> list[TimelineEvent]:
        """Generate the ordered event list for *workout*.

        Args:
            workout: A loaded Workout.
            seed: Optional seed; the same seed always yields the same timeline.

        Returns:
            Events ordered by start time. May be truncated if the run stopped
            for lack of progress; use ``generate_with_trace`` to find out.
        """
        events, _ = self.generate_with_trace(workout, seed)
        return events

    def generate_with_trace(
        self, workout: Workout, seed: int | None = None
    ) -> tuple[list[TimelineEvent], GenerationTrace]:
        """Generate the timeline together with how the run ended."""
        scheduler = WorkoutScheduler(
            workout, seed=seed, settings=self.settings, logger=self._injected_logger
        )
        events, trace = scheduler.run()
        if trace.truncated:
            self.logger.info(
                "Timeline for %r truncated after %d events", workout.name, len(events)
            )
        return events, trace

    def generate_with_stats(
        self, workout: Workout, seed: int | None = None
    ) -> tuple[list[TimelineEvent], TimelineStats]:
        """Generate the timeline and its aggregate statistics."""
        events = self.generate(workout, seed)
        return events, calculate_timeline_stats(events)


def generate_timeline(
    workout: Workout,
    seed: int | None = None,
    settings: GenerationSettings | None = None,
) -> list[TimelineEvent]:
    """Convenience wrapper around ``TimelineEngine().generate``."""
    return TimelineEngine(settings=settings).generate(workout, seed)
