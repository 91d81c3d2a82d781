"""Custom exception hierarchy for the ghosting engine."""

from __future__ import annotations


class GhostingEngineError(Exception):
    """Base exception for all ghosting_engine errors."""


class WorkoutLoadError(GhostingEngineError):
    """A workout document could not be normalized into a Workout."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class TimelineGenerationError(GhostingEngineError):
    """A generation run hit a safety bound (iteration or selection cap)."""
