"""Tests for the TimelineEngine orchestrator."""

from __future__ import annotations

import logging

import pytest

from ghosting_engine.engine import TimelineEngine, generate_timeline
from ghosting_engine.loader import load_workout
from ghosting_engine.models.enums import TerminationReason
from ghosting_engine.models.settings import GenerationSettings
from ghosting_engine.models.workout import Workout


@pytest.fixture
def triple(single_shot_triple_repeat) -> Workout:
    return load_workout(single_shot_triple_repeat)


@pytest.fixture
def stalled(workout_factory) -> Workout:
    """A time-limited workout whose only shot takes no time."""
    return workout_factory(
        [{"type": "Pattern", "id": "p", "name": "p",
          "entries": [{"type": "Shot", "id": "a", "name": "A", "config": {"interval": 0}}]}],
        limits={"type": "time-limit", "value": 10},
    )


class TestTimelineEngine:
    """Integration tests for TimelineEngine."""

    def test_generate(self, triple: Workout) -> None:
        events = TimelineEngine().generate(triple)
        assert len(events) == 3
        assert events[-1].end_time == 15.0

    def test_generate_with_trace(self, triple: Workout) -> None:
        events, trace = TimelineEngine().generate_with_trace(triple, seed=1)
        assert trace.termination == TerminationReason.PATTERNS_EXHAUSTED
        assert trace.total_shots == 3
        assert trace.total_time == 15.0
        assert trace.events_generated == len(events)
        assert not trace.truncated

    def test_generate_with_stats(self, triple: Workout) -> None:
        events, stats = TimelineEngine().generate_with_stats(triple)
        assert stats.total_events == len(events) == 3
        assert stats.total_duration == 15.0
        assert stats.average_shot_interval == 5.0

    def test_settings_are_passed_through(self, stalled: Workout) -> None:
        engine = TimelineEngine(settings=GenerationSettings(max_no_progress=3))
        events, trace = engine.generate_with_trace(stalled)
        assert trace.truncated
        assert len(events) == 3

    def test_truncation_is_logged(self, stalled: Workout, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="ghosting_engine"):
            TimelineEngine().generate(stalled)
        assert "truncated" in caplog.text
        assert "No time progress" in caplog.text

    def test_injected_logger(self, stalled: Workout, caplog) -> None:
        logger = logging.getLogger("ghosting.test")
        with caplog.at_level(logging.WARNING, logger="ghosting.test"):
            TimelineEngine(logger=logger).generate(stalled)
        assert any(r.name == "ghosting.test" for r in caplog.records)

    def test_seeded_runs_match(self, mixed_workout_data) -> None:
        workout = load_workout(mixed_workout_data)
        engine = TimelineEngine()
        first = [(e.entry_id, e.start_time) for e in engine.generate(workout, seed=8)]
        second = [(e.entry_id, e.start_time) for e in engine.generate(workout, seed=8)]
        assert first == second


class TestGenerateTimeline:
    def test_module_function(self, triple: Workout) -> None:
        events = generate_timeline(triple, seed=3)
        assert [e.start_time for e in events] == [0.0, 5.0, 10.0]

    def test_empty_workout(self, workout_factory) -> None:
        assert generate_timeline(workout_factory([])) == []
