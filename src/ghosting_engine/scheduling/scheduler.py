"""WorkoutScheduler — drives pattern cursors to produce a timeline.

One ``run()`` walks the workout's patterns (in order or shuffled), pulls
entries through a PatternCursor, times them, expands shot repeats into
back-to-back events and enforces pattern- and workout-level limits. When the
pattern list is exhausted under a shot or time limit the walk wraps around
and a new superset begins.

Two safety bounds keep a run finite: ``max_events`` processed entries
(exceeding it raises TimelineGenerationError) and ``max_no_progress``
consecutive iterations that do not move the clock (the run stops and the
partial timeline is returned).
"""

from __future__ import annotations

import dataclasses
import logging

from ghosting_engine.config_resolver import resolve_config
from ghosting_engine.exceptions import TimelineGenerationError
from ghosting_engine.models.config import EffectiveConfig
from ghosting_engine.models.enums import (
    DEFAULT_INTERVAL_S,
    EntryType,
    IterationType,
    LimitType,
    TerminationReason,
)
from ghosting_engine.models.settings import GenerationSettings
from ghosting_engine.models.state import GeneratorState
from ghosting_engine.models.timeline import GenerationTrace, RepeatMetadata, TimelineEvent
from ghosting_engine.models.workout import Entry, Message, Pattern, Shot, Workout
from ghosting_engine.ordering.entry_orderer import order_entries, shuffle_pattern_order
from ghosting_engine.scheduling.pattern_cursor import PatternCursor
from ghosting_engine.timing.durations import (
    effective_interval,
    message_duration,
    message_timing,
    shot_timing,
    tts_duration,
)
from ghosting_engine.timing.randomness import RandomSource
from ghosting_engine.timing.repeat import resolve_repeat_count


class WorkoutScheduler:
    """Generates the timeline for one workout.

    Usage:
        scheduler = WorkoutScheduler(workout, seed=42)
        events, trace = scheduler.run()

    Every call to ``run()`` starts from fresh state, so the same scheduler
    with the same seed always yields the same timeline.
    """

    def __init__(
        self,
        workout: Workout,
        seed: int | None = None,
        settings: GenerationSettings | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.workout = workout
        self.seed = seed
        self.settings = settings or GenerationSettings()
        self.logger = logger or logging.getLogger(__name__)
        self._workout_config = EffectiveConfig.from_mapping(workout.config)
        self._workout_limits = workout.limits
        self.state = GeneratorState()
        self.random = RandomSource(seed)
        self._cursor: PatternCursor | None = None
        self._termination: TerminationReason | None = None

    def run(self) -> tuple[list[TimelineEvent], GenerationTrace]:
        """Generate the full timeline.

        Returns:
            A tuple of (events, GenerationTrace).

        Raises:
            TimelineGenerationError: If ``max_events`` entries are processed
                without the workout finishing, or entry selection loops.
        """
        self.state = GeneratorState()
        self.random = RandomSource(self.seed)
        self._termination = None
        events: list[TimelineEvent] = []

        patterns = self.workout.patterns
        if not patterns:
            return events, self._trace(TerminationReason.EMPTY_WORKOUT, events)

        self.logger.debug(
            "Generating timeline for %r: %d patterns, limit %s",
            self.workout.name,
            len(patterns),
            self._workout_limits.type.name,
        )

        if self._workout_config.iteration_type == IterationType.SHUFFLE:
            self.state.pattern_order = shuffle_pattern_order(
                len(patterns), self.random.derive_seed()
            )

        cursor = self._try_open(self.state.current_pattern_index())
        if cursor is None:
            cursor = self._open_next_pattern(skipped=1)
        if cursor is None:
            return events, self._trace(TerminationReason.PATTERNS_EXHAUSTED, events)
        self._cursor = cursor

        self._loop(events)
        return events, self._trace(self._termination or TerminationReason.PATTERNS_EXHAUSTED, events)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def _loop(self, events: list[TimelineEvent]) -> None:
        state = self.state
        last_time = state.current_time
        no_progress = 0

        while True:
            if state.events_generated >= self.settings.max_events:
                raise TimelineGenerationError(
                    f"Processed {self.settings.max_events} entries without finishing "
                    f"workout {self.workout.name!r}"
                )

            reached = self._workout_limit_reached()
            if reached is not None:
                self._termination = reached
                return

            if state.pending:
                if not self._release_pending(events):
                    return
                continue

            entry = self._pull()
            if entry is None:
                return

            if not self._process(entry, events):
                return

            if state.current_time > last_time:
                last_time = state.current_time
                no_progress = 0
            else:
                no_progress += 1
                if no_progress >= self.settings.max_no_progress:
                    self.logger.warning(
                        "No time progress for %d iterations at t=%.2fs, stopping early",
                        no_progress,
                        state.current_time,
                    )
                    self._termination = TerminationReason.NO_PROGRESS
                    return

    def _process(self, entry: Entry, events: list[TimelineEvent]) -> bool:
        """Limit-check, time and emit one pulled entry.

        Returns False when the workout has to stop.
        """
        state = self.state
        cursor = self._cursor
        config = self._config(entry)
        interval = effective_interval(
            config.interval,
            config.interval_offset,
            config.interval_offset_type,
            self.random.uniform,
        )
        is_shot = entry.entry_type == EntryType.SHOT
        if is_shot:
            duration = interval
        else:
            duration = message_duration(
                tts_duration(entry.text, config.speech_rate), interval, config.interval_type
            )

        # Pattern limits: move on without re-entering an extended set.
        if (is_shot and cursor.would_exceed_shot_limit()) or cursor.would_exceed_time_limit(duration):
            self.logger.debug(
                "Pattern %r limit reached before %r", cursor.pattern.name, entry.name
            )
            return self._advance(allow_extension=False)

        limits = self._workout_limits
        if is_shot and limits.type == LimitType.SHOT_LIMIT and state.total_shots + 1 > limits.value:
            self._termination = TerminationReason.WORKOUT_SHOT_LIMIT
            return False
        if limits.type == LimitType.TIME_LIMIT and state.current_time + duration > limits.value:
            self._termination = TerminationReason.WORKOUT_TIME_LIMIT
            return False

        cursor.take(entry)
        if is_shot:
            self._emit_shot(entry, config, interval, events)
        else:
            self._emit_message(entry, config, interval, events)
        return True

    def _emit_shot(
        self, shot: Shot, config: EffectiveConfig, interval: float, events: list[TimelineEvent]
    ) -> None:
        state = self.state
        call_count = state.shots_processed
        state.shots_processed += 1
        state.events_generated += 1

        repeats = resolve_repeat_count(shot.repeat, self.seed, call_count)
        if repeats == 0:
            state.entries_skipped += 1
            self.logger.debug("Skipping %r (resolved to 0 repeats)", shot.name)
            return

        metadata = self._metadata(total_shot_repeats=repeats)
        start = state.current_time
        batch = [
            self._shot_event(
                shot,
                config,
                start + i * interval,
                interval,
                dataclasses.replace(metadata, shot_repeat_number=i + 1),
            )
            for i in range(repeats)
        ]
        self._release(batch[0], events)
        state.pending.extend(batch[1:])

    def _emit_message(
        self, message: Message, config: EffectiveConfig, interval: float, events: list[TimelineEvent]
    ) -> None:
        self.state.events_generated += 1
        timing = message_timing(message.text, config, self.state.current_time, interval)
        pattern = self._cursor.pattern
        self._release(
            TimelineEvent(
                name=message.name,
                event_type=EntryType.MESSAGE,
                entry_id=message.id,
                start_time=timing.start_time,
                end_time=timing.end_time,
                duration=timing.duration,
                sub_events=timing.sub_events,
                repeat=self._metadata(total_shot_repeats=1),
                pattern_id=pattern.id,
                pattern_name=pattern.name,
                message_text=message.text,
                config=config,
            ),
            events,
        )

    def _release(self, event: TimelineEvent, events: list[TimelineEvent]) -> None:
        events.append(event)
        self.state.current_time = event.end_time
        self._cursor.record(event.duration, event.is_shot)
        if event.is_shot:
            self.state.total_shots += 1

    def _release_pending(self, events: list[TimelineEvent]) -> bool:
        """Release the next queued repeat, or drop the queue at a limit."""
        state = self.state
        cursor = self._cursor
        event = state.pending[0]

        if cursor.would_exceed_shot_limit() or cursor.would_exceed_time_limit(event.duration):
            self.logger.debug(
                "Dropping %d pending repeats of %r at pattern %r limit",
                len(state.pending),
                event.name,
                cursor.pattern.name,
            )
            state.entries_skipped += len(state.pending)
            state.pending.clear()
            return self._advance()

        limits = self._workout_limits
        if limits.type == LimitType.TIME_LIMIT and state.current_time + event.duration > limits.value:
            self._termination = TerminationReason.WORKOUT_TIME_LIMIT
            return False

        state.pending.popleft()
        state.events_generated += 1
        self._release(event, events)
        return True

    # ------------------------------------------------------------------
    # Entry selection
    # ------------------------------------------------------------------

    def _pull(self) -> Entry | None:
        """Next playable entry, advancing patterns as they finish."""
        for _ in range(self.settings.max_selection_loops):
            cursor = self._cursor
            entry = None if cursor.is_finished() else cursor.next_candidate()
            if entry is None:
                if not self._advance():
                    return None
                continue

            if entry.entry_type == EntryType.MESSAGE and self._skip_at_end(entry):
                self.logger.debug("Dropping end-of-workout message %r", entry.name)
                cursor.drop(entry)
                self.state.entries_skipped += 1
                continue

            return entry

        raise TimelineGenerationError(
            f"Entry selection did not settle after {self.settings.max_selection_loops} attempts"
        )

    def _skip_at_end(self, message: Message) -> bool:
        config = self._config(message)
        if not config.skip_at_end_of_workout:
            return False
        return self._is_last_entry_in_workout(message, config)

    def _is_last_entry_in_workout(self, entry: Entry, config: EffectiveConfig) -> bool:
        """Best-effort guess whether *entry* would be the workout's final entry.

        Approximate once supersets are involved: a later superset may still
        follow a time-limited workout's "last" entry.
        """
        state = self.state
        cursor = self._cursor
        if len(cursor.available) > 1:
            return False

        if state.pattern_order is not None:
            position = state.pattern_order_index
        else:
            position = state.pattern_index
        if position < len(self.workout.patterns) - 1:
            return False

        if cursor.runs_completed < self._pattern_repeats(cursor.pattern_index) - 1:
            return False

        limits = self._workout_limits
        if limits.type == LimitType.ALL_SHOTS:
            return True
        # A reached shot limit ends the run before the next pull.
        if limits.type == LimitType.SHOT_LIMIT:
            return False

        if entry.entry_type == EntryType.MESSAGE:
            duration = message_duration(
                tts_duration(entry.text, config.speech_rate), config.interval, config.interval_type
            )
        else:
            duration = config.interval
        return state.current_time + duration >= limits.value

    # ------------------------------------------------------------------
    # Pattern transitions
    # ------------------------------------------------------------------

    def _advance(self, allow_extension: bool = True) -> bool:
        """Move past the current run: extended set, next run or next pattern.

        Returns False when no pattern is left to play.
        """
        cursor = self._cursor
        pattern = cursor.pattern
        order = self._order(pattern)

        if allow_extension and pattern.limits.is_capped:
            if cursor.should_continue_extended_set(self._min_shot_interval(pattern), order):
                self.logger.debug(
                    "Extended set for %r (shots=%d, time=%.2fs)",
                    pattern.name,
                    cursor.shots_played,
                    cursor.time_elapsed,
                )
                cursor.extend(order)
                return True

        if order and cursor.runs_completed < self._pattern_repeats(cursor.pattern_index) - 1:
            cursor.restart(order)
            return True

        next_cursor = self._open_next_pattern()
        if next_cursor is None:
            self._termination = TerminationReason.PATTERNS_EXHAUSTED
            return False
        self._cursor = next_cursor
        return True

    def _open_next_pattern(self, skipped: int = 0) -> PatternCursor | None:
        """Step the pattern pointer to the next playable pattern.

        Unplayable patterns (zero repeats, or nothing left after ordering)
        are skipped; a full cycle of them ends the workout.
        """
        count = len(self.workout.patterns)
        while skipped < count:
            if not self._step_pattern_pointer():
                return None
            index = self.state.current_pattern_index()
            cursor = self._try_open(index)
            if cursor is not None:
                self.logger.debug(
                    "Superset %d: pattern %r",
                    self.state.superset,
                    self.workout.patterns[index].name,
                )
                return cursor
            skipped += 1
        return None

    def _step_pattern_pointer(self) -> bool:
        """Advance to the next pattern slot, wrapping into a new superset.

        Returns False when the list is exhausted and the workout has no
        shot or time limit to keep it going.
        """
        state = self.state
        count = len(self.workout.patterns)
        if state.pattern_order is not None:
            state.pattern_order_index += 1
            wrapped = state.pattern_order_index >= count
        else:
            state.pattern_index += 1
            wrapped = state.pattern_index >= count
        if not wrapped:
            return True

        if not self._workout_limits.is_capped:
            return False

        state.superset += 1
        if state.pattern_order is not None:
            state.pattern_order = shuffle_pattern_order(count, self.random.derive_seed())
            state.pattern_order_index = 0
        else:
            state.pattern_index = 0
        self.logger.debug("Starting superset %d at t=%.2fs", state.superset, state.current_time)
        return True

    def _try_open(self, index: int) -> PatternCursor | None:
        """Cursor for the pattern at *index*, or None when it is unplayable."""
        if not self._is_playable(index):
            return None
        pattern = self.workout.patterns[index]
        order = self._order(pattern)
        if not order:
            self.logger.debug("Pattern %r has no entries left after ordering", pattern.name)
            return None
        return PatternCursor(pattern=pattern, pattern_index=index, available=order)

    def _is_playable(self, index: int) -> bool:
        return bool(self.workout.patterns[index].entries) and self._pattern_repeats(index) > 0

    def _pattern_repeats(self, index: int) -> int:
        """Resolved repeat count for a pattern, stable within a superset."""
        key = (index, self.state.superset)
        if key not in self.state.pattern_repeats:
            pattern = self.workout.patterns[index]
            self.state.pattern_repeats[key] = resolve_repeat_count(
                pattern.repeat, self.seed, self.state.superset
            )
        return self.state.pattern_repeats[key]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _order(self, pattern: Pattern) -> list[Entry]:
        iteration = resolve_config(self.workout.config, pattern.config, None).iteration_type
        return order_entries(pattern.entries, iteration, self.random.derive_seed())

    def _config(self, entry: Entry) -> EffectiveConfig:
        return resolve_config(self.workout.config, self._cursor.pattern.config, entry.config)

    def _min_shot_interval(self, pattern: Pattern) -> float:
        intervals = [
            resolve_config(self.workout.config, pattern.config, shot.config).interval
            for shot in pattern.shots
        ]
        return min(intervals, default=DEFAULT_INTERVAL_S)

    def _metadata(self, total_shot_repeats: int) -> RepeatMetadata:
        cursor = self._cursor
        return RepeatMetadata(
            superset_number=self.state.superset,
            pattern_repeat_number=cursor.runs_completed + 1,
            shot_repeat_number=1,
            total_pattern_repeats=self._pattern_repeats(cursor.pattern_index),
            total_shot_repeats=total_shot_repeats,
        )

    def _shot_event(
        self,
        shot: Shot,
        config: EffectiveConfig,
        start: float,
        interval: float,
        metadata: RepeatMetadata,
    ) -> TimelineEvent:
        draw = self.random.uniform if self.random.seeded else None
        timing = shot_timing(config, start, interval, draw)
        pattern = self._cursor.pattern
        return TimelineEvent(
            name=shot.name,
            event_type=EntryType.SHOT,
            entry_id=shot.id,
            start_time=timing.start_time,
            end_time=timing.end_time,
            duration=timing.duration,
            sub_events=timing.sub_events,
            repeat=metadata,
            pattern_id=pattern.id,
            pattern_name=pattern.name,
            split_step_speed=timing.split_step_speed,
            config=config,
        )

    def _workout_limit_reached(self) -> TerminationReason | None:
        limits = self._workout_limits
        if limits.type == LimitType.SHOT_LIMIT and self.state.total_shots >= limits.value:
            return TerminationReason.WORKOUT_SHOT_LIMIT
        if limits.type == LimitType.TIME_LIMIT and self.state.current_time >= limits.value:
            return TerminationReason.WORKOUT_TIME_LIMIT
        return None

    def _trace(self, termination: TerminationReason, events: list[TimelineEvent]) -> GenerationTrace:
        return GenerationTrace(
            termination=termination,
            supersets_started=self.state.superset,
            events_generated=len(events),
            entries_skipped=self.state.entries_skipped,
            total_shots=self.state.total_shots,
            total_time=self.state.current_time,
        )
