"""Per-pattern run state used by the workout scheduler."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ghosting_engine.models.enums import EXTENDED_SET_TOLERANCE_S, EntryType, LimitType
from ghosting_engine.models.workout import Entry, Pattern


@dataclass
class PatternCursor:
    """Tracks one pattern while it is being played.

    ``shots_played`` and ``time_elapsed`` count the current run. A normal
    repeat run resets them; an extended set (used by shot- and time-limited
    patterns to keep going until the limit is met) carries them over.
    """

    pattern: Pattern
    pattern_index: int
    available: list[Entry] = field(default_factory=list)
    shots_played: int = 0
    time_elapsed: float = 0.0
    runs_completed: int = 0
    last_played: Entry | None = None

    # ------------------------------------------------------------------
    # Limit checks
    # ------------------------------------------------------------------

    def is_finished(self) -> bool:
        """True when the pattern's own limit is met, or all-shots is exhausted.

        Limited patterns that run out of entries are not "finished" here;
        the scheduler decides between an extended set and moving on.
        """
        limits = self.pattern.limits
        if limits.type == LimitType.SHOT_LIMIT:
            return self.shots_played >= limits.value
        if limits.type == LimitType.TIME_LIMIT:
            return self.time_elapsed >= limits.value
        return not self.available

    def should_continue_extended_set(
        self, min_interval: float, order: Sequence[Entry] | None = None
    ) -> bool:
        """Whether another pass over the pattern can still add something.

        Args:
            min_interval: Shortest shot interval in the pattern, seconds.
            order: The entries the next pass would play. Defaults to the
                pattern definition.
        """
        entries = self.pattern.entries if order is None else order
        if not any(e.entry_type == EntryType.SHOT for e in entries):
            return False
        limits = self.pattern.limits
        if limits.type == LimitType.SHOT_LIMIT:
            return self.shots_played < limits.value
        if limits.type == LimitType.TIME_LIMIT:
            return self.time_elapsed + min_interval <= limits.value + EXTENDED_SET_TOLERANCE_S
        return False

    def would_exceed_shot_limit(self) -> bool:
        limits = self.pattern.limits
        return limits.type == LimitType.SHOT_LIMIT and self.shots_played + 1 > limits.value

    def would_exceed_time_limit(self, duration: float) -> bool:
        limits = self.pattern.limits
        return limits.type == LimitType.TIME_LIMIT and self.time_elapsed + duration > limits.value

    # ------------------------------------------------------------------
    # Run transitions
    # ------------------------------------------------------------------

    def extend(self, order: list[Entry]) -> None:
        """Start an extended set: fresh order, counters persist."""
        self.available = list(order)
        self.runs_completed += 1
        self.last_played = None

    def restart(self, order: list[Entry]) -> None:
        """Start the next normal repeat run: fresh order and counters."""
        self.available = list(order)
        self.shots_played = 0
        self.time_elapsed = 0.0
        self.runs_completed += 1
        self.last_played = None

    # ------------------------------------------------------------------
    # Entry selection
    # ------------------------------------------------------------------

    def apply_positional_constraints(self, candidates: list[Entry]) -> list[Entry]:
        """Narrow *candidates* to entries whose position lock is due now.

        At pattern start a slot-1 entry wins; with a single candidate left a
        ``last`` entry wins; otherwise an entry locked to the next slot wins.
        When nothing is due the candidates come back unchanged.
        """
        if not candidates:
            return candidates

        if self.last_played is None:
            first = [c for c in candidates if c.position.is_slot(1)]
            if first:
                return first

        if len(candidates) == 1:
            tail = [c for c in candidates if c.position.is_last]
            if tail:
                return tail

        due = [c for c in candidates if c.position.is_slot(self.shots_played + 1)]
        if due:
            return due

        return candidates

    def next_candidate(self) -> Entry | None:
        """Next entry to consider, without consuming it."""
        constrained = self.apply_positional_constraints(list(self.available))
        return constrained[0] if constrained else None

    def take(self, entry: Entry) -> None:
        """Consume *entry* as played."""
        self.drop(entry)
        self.last_played = entry

    def drop(self, entry: Entry) -> None:
        """Remove *entry* without playing it."""
        for i, candidate in enumerate(self.available):
            if candidate is entry:
                del self.available[i]
                return

    def record(self, duration: float, is_shot: bool) -> None:
        """Account for one released event."""
        self.time_elapsed += duration
        if is_shot:
            self.shots_played += 1
