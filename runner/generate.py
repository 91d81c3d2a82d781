"""Timeline runner — generates a workout timeline from a workout JSON file.

Usage:
    python -m runner.generate workout.json                   # timeline JSON to stdout
    python -m runner.generate workout.json --seed 7 --format sound-events
    python -m runner.generate workout.json --format summary --output out.json
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from ghosting_engine.engine import TimelineEngine
from ghosting_engine.exceptions import GhostingEngineError
from ghosting_engine.loader import load_workout_file
from ghosting_engine.models.enums import SPLIT_STEP_SPEED_KEYS
from ghosting_engine.reporting.stats import calculate_timeline_stats, calculate_work_rest_ratio
from ghosting_engine.reporting.summary import summarize_workout
from ghosting_engine.serialization import to_sound_events, to_timeline_json

from runner.config import DEFAULT_SEED, LOG_LEVEL, OUTPUT_DIR

logger = logging.getLogger(__name__)

FORMATS = ("timeline", "sound-events", "summary")


def _sound_events_json(events) -> list[dict]:
    cues = []
    for cue in to_sound_events(events):
        item = {"type": cue.kind.name.lower(), "time": round(cue.time, 2)}
        if cue.text:
            item["text"] = cue.text
            item["voice"] = cue.voice
            item["speechRate"] = cue.speech_rate
        if cue.speed is not None:
            item["speed"] = SPLIT_STEP_SPEED_KEYS[cue.speed]
        if cue.countdown_number is not None:
            item["countdownNumber"] = cue.countdown_number
        if cue.is_completion:
            item["isCompletion"] = True
        cues.append(item)
    return cues


def _summary_json(events) -> dict:
    stats = calculate_timeline_stats(events)
    split = calculate_work_rest_ratio(events)
    summary = summarize_workout(events)
    return {
        "stats": dataclasses.asdict(stats),
        "workRest": {
            "workTime": split.work_time,
            "restTime": split.rest_time,
            "ratio": split.ratio,
        },
        "summary": {
            "primaryFocus": summary.primary_focus,
            "intensityStructure": summary.intensity_structure,
            "explanation": summary.explanation,
        },
    }


def run(workout_path: Path, seed: int | None, fmt: str, output: Path | None) -> int:
    """Generate one timeline and write it; returns a process exit code."""
    try:
        workout = load_workout_file(workout_path)
        events, trace = TimelineEngine().generate_with_trace(workout, seed=seed)
    except FileNotFoundError:
        logger.error("Workout not found at %s", workout_path)
        return 1
    except GhostingEngineError as exc:
        logger.error("Failed to generate timeline: %s", exc)
        return 1

    logger.info(
        "Generated %d events (%d shots, %.1fs) for %r, stopped: %s",
        len(events),
        trace.total_shots,
        trace.total_time,
        workout.name,
        trace.termination.name,
    )

    if fmt == "sound-events":
        payload = _sound_events_json(events)
    elif fmt == "summary":
        payload = _summary_json(events)
    else:
        payload = to_timeline_json(events)

    text = json.dumps(payload, indent=2)
    if output is None:
        sys.stdout.write(text + "\n")
    else:
        if not output.is_absolute():
            output = OUTPUT_DIR / output
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n")
        logger.info("Wrote %s", output)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Ghosting workout timeline generator")
    parser.add_argument("workout", type=Path, help="Path to a workout JSON file")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Seed for reproducible output")
    parser.add_argument("--format", choices=FORMATS, default="timeline", dest="fmt")
    parser.add_argument("--output", type=Path, default=None, help="Write to a file instead of stdout")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return run(args.workout, args.seed, args.fmt, args.output)


if __name__ == "__main__":
    sys.exit(main())
