"""Workout focus summary inferred from a generated timeline.

Classification order:
    1. Fewer than 10 shots per minute of work time → technical refinement.
    2. No rest (no message time) → continuous, graded by shots per minute.
    3. Otherwise by work-to-rest ratio: ≥ 2.0 anaerobic, [0.9, 2.0) match
       endurance, (0, 0.9) foundational endurance.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ghosting_engine.models.timeline import TimelineEvent
from ghosting_engine.reporting.stats import calculate_work_rest_ratio, shots_per_minute

# Shots per minute of work time
_TECHNICAL_MAX_RATE = 10.0
_CONTINUOUS_HIGH_RATE = 20.0
_CONTINUOUS_MODERATE_RATE = 12.0

# Work:rest ratio bands
_ANAEROBIC_MIN_RATIO = 2.0
_MATCH_ENDURANCE_MIN_RATIO = 0.9


@dataclass(frozen=True)
class WorkoutSummary:
    primary_focus: str
    intensity_structure: str
    explanation: str


def summarize_workout(events: Sequence[TimelineEvent]) -> WorkoutSummary:
    """Classify the session's training focus from its timeline."""
    split = calculate_work_rest_ratio(events)
    rate = shots_per_minute(events)
    total_shots = sum(1 for e in events if e.is_shot)

    if total_shots > 0 and rate < _TECHNICAL_MAX_RATE:
        return WorkoutSummary(
            primary_focus="Technical Refinement (Inferred)",
            intensity_structure="Deliberate Practice",
            explanation=(
                "Based on the deliberate pace of movements, this session appears to focus "
                "on refining footwork mechanics and shot preparation rather than "
                "cardiovascular conditioning."
            ),
        )

    ratio = split.ratio
    if ratio is None:
        if rate >= _CONTINUOUS_HIGH_RATE:
            return WorkoutSummary(
                primary_focus="High-Intensity Continuous",
                intensity_structure="Continuous High-Pace Drill",
                explanation=(
                    "This session was performed as a continuous high-intensity drill "
                    "without structured rest periods, focusing on building cardiovascular "
                    "endurance and movement speed."
                ),
            )
        if rate >= _CONTINUOUS_MODERATE_RATE:
            return WorkoutSummary(
                primary_focus="Moderate-Intensity Continuous",
                intensity_structure="Continuous Moderate-Pace Drill",
                explanation=(
                    "This session was performed as a continuous moderate-intensity drill "
                    "without structured rest periods, focusing on building stamina and "
                    "movement consistency."
                ),
            )
        return WorkoutSummary(
            primary_focus="Technical Refinement",
            intensity_structure="Continuous Technical Drill",
            explanation=(
                "This session was performed as a continuous technical drill without "
                "structured rest periods, focusing on movement precision and form."
            ),
        )

    if ratio >= _ANAEROBIC_MIN_RATIO:
        return WorkoutSummary(
            primary_focus="Anaerobic Fitness & Speed",
            intensity_structure="High-Intensity Interval Training (HIIT)",
            explanation=(
                f"This workout's {ratio:.1f}:1 work-to-rest ratio is designed to maximize "
                "explosive power and on-court quickness, mimicking the demands of "
                "high-intensity rallies."
            ),
        )
    if ratio >= _MATCH_ENDURANCE_MIN_RATIO:
        return WorkoutSummary(
            primary_focus="Match Endurance & Stamina",
            intensity_structure="Sustained Intervals",
            explanation=(
                f"With a balanced {ratio:.1f}:1 work-to-rest structure, this session builds "
                "the stamina needed to keep a high level of play through long rallies."
            ),
        )
    if ratio > 0:
        return WorkoutSummary(
            primary_focus="Foundational Endurance",
            intensity_structure="Foundational Intervals",
            explanation=(
                f"This workout's {ratio:.1f}:1 work-to-rest ratio builds a solid fitness "
                "foundation, allowing ample recovery so every movement is performed "
                "correctly."
            ),
        )
    return WorkoutSummary(
        primary_focus="Continuous Effort",
        intensity_structure="Continuous Drill",
        explanation=(
            "This session was performed as a continuous drill without structured rest "
            "periods, focusing on sustained physical effort."
        ),
    )
