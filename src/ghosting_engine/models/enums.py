"""Enumerations and timing constants for the ghosting engine.

Wire strings used by workout documents are mapped onto these enums by the
loader and the config resolver; the engine itself never compares strings.
"""

from enum import IntEnum, auto


class EntryType(IntEnum):
    """Kind of entry inside a pattern."""

    SHOT = auto()
    MESSAGE = auto()


class PositionKind(IntEnum):
    """Positional constraint attached to an entry or pattern."""

    NORMAL = auto()
    LINKED = auto()   # Follows the preceding entry as one unit
    LAST = auto()     # Pinned to the tail of the pattern
    FIXED = auto()    # Pinned to a 1-based slot


class IterationType(IntEnum):
    """How entries (or patterns) are ordered on each pass."""

    IN_ORDER = auto()
    SHUFFLE = auto()


class LimitType(IntEnum):
    """Termination rule for a pattern or a whole workout."""

    ALL_SHOTS = auto()
    SHOT_LIMIT = auto()
    TIME_LIMIT = auto()


class IntervalOffsetType(IntEnum):
    """How an interval offset is applied."""

    FIXED = auto()
    RANDOM = auto()


class IntervalType(IntEnum):
    """How a message's interval combines with its speech duration."""

    FIXED = auto()        # max(tts, interval)
    ADDITIONAL = auto()   # tts + interval


class SplitStepSpeed(IntEnum):
    """Split-step cue speed before each beep."""

    AUTO_SCALE = auto()
    SLOW = auto()
    MEDIUM = auto()
    FAST = auto()
    RANDOM = auto()
    NONE = auto()


class TerminationReason(IntEnum):
    """Why a generation run stopped."""

    EMPTY_WORKOUT = auto()
    PATTERNS_EXHAUSTED = auto()
    WORKOUT_SHOT_LIMIT = auto()
    WORKOUT_TIME_LIMIT = auto()
    NO_PROGRESS = auto()


# ---------------------------------------------------------------------------
# Wire string tables
# ---------------------------------------------------------------------------

ITERATION_TYPES = {
    "in-order": IterationType.IN_ORDER,
    "shuffle": IterationType.SHUFFLE,
}

LIMIT_TYPES = {
    "all-shots": LimitType.ALL_SHOTS,
    "all-entries": LimitType.ALL_SHOTS,  # legacy name
    "shot-limit": LimitType.SHOT_LIMIT,
    "time-limit": LimitType.TIME_LIMIT,
}

INTERVAL_OFFSET_TYPES = {
    "fixed": IntervalOffsetType.FIXED,
    "random": IntervalOffsetType.RANDOM,
}

INTERVAL_TYPES = {
    "fixed": IntervalType.FIXED,
    "additional": IntervalType.ADDITIONAL,
}

SPLIT_STEP_SPEEDS = {
    "auto-scale": SplitStepSpeed.AUTO_SCALE,
    "slow": SplitStepSpeed.SLOW,
    "medium": SplitStepSpeed.MEDIUM,
    "fast": SplitStepSpeed.FAST,
    "random": SplitStepSpeed.RANDOM,
    "none": SplitStepSpeed.NONE,
}

ENTRY_TYPE_KEYS = {
    EntryType.SHOT: "Shot",
    EntryType.MESSAGE: "Message",
}

SPLIT_STEP_SPEED_KEYS = {speed: key for key, speed in SPLIT_STEP_SPEEDS.items()}

# ---------------------------------------------------------------------------
# Config defaults
# ---------------------------------------------------------------------------

DEFAULT_INTERVAL_S = 5.0
DEFAULT_ANNOUNCEMENT_LEAD_TIME_S = 2.5
DEFAULT_SPEECH_RATE = 1.0
DEFAULT_VOICE = "Default"

# ---------------------------------------------------------------------------
# Sub-event timing
# ---------------------------------------------------------------------------

# Split-step cue lead before the beep, seconds
SPLIT_STEP_DURATION_S = {
    SplitStepSpeed.FAST: 0.32,
    SplitStepSpeed.MEDIUM: 0.48,
    SplitStepSpeed.SLOW: 0.64,
}

# auto-scale: interval <= FAST bound -> fast, <= MEDIUM bound -> medium, else slow
AUTO_SCALE_FAST_MAX_INTERVAL_S = 4.0
AUTO_SCALE_MEDIUM_MAX_INTERVAL_S = 5.0

# Speech estimate used for every message duration
TTS_WORDS_PER_MINUTE = 150

# ---------------------------------------------------------------------------
# Generation safety bounds
# ---------------------------------------------------------------------------

MAX_EVENTS = 1000
MAX_NO_PROGRESS = 10
MAX_SELECTION_LOOPS = 100

# Slack allowed when deciding whether another shot fits a time-limited pattern
EXTENDED_SET_TOLERANCE_S = 0.1

# ---------------------------------------------------------------------------
# Sound events
# ---------------------------------------------------------------------------

MAX_SPOKEN_COUNTDOWN = 10
COUNTDOWN_BEEP_OFFSET_S = 0.1
COMPLETION_ANNOUNCEMENT = "Workout complete"
