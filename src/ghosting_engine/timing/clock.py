"""Time-string helpers: ``MM:SS`` formatting and parsing of limit values.

All functions are pure and lenient: unparseable input yields 0 (or the
input unchanged for ``parse_time_limit``) rather than raising.
"""

from __future__ import annotations

import math
import re
from typing import Any

_MM_SS = re.compile(r"^(\d+):(\d+)$")
_MM_SS_FRACTION = re.compile(r"^(\d+):(\d+)\.(\d+)$")
_SECONDS_SUFFIX = re.compile(r"^(\d+(?:\.\d+)?)s$")


def seconds_to_time_str(
    seconds: Any, precise: bool = False, high_precision: bool = False
) -> str:
    """Format seconds as ``MM:SS``, ``MM:SS.cc`` or ``MM:SS.mmm``.

    Negative or non-numeric input formats as zero.
    """
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)) or seconds < 0:
        return "00:00.00" if precise else "00:00"

    minutes = int(seconds // 60)
    remainder = seconds % 60
    whole = int(remainder)
    fraction = remainder % 1

    if precise:
        return f"{minutes:02d}:{whole:02d}.{math.floor(fraction * 100):02d}"
    if high_precision:
        return f"{minutes:02d}:{whole:02d}.{math.floor(fraction * 1000):03d}"
    return f"{minutes:02d}:{whole:02d}"


def time_str_to_seconds(value: Any) -> float:
    """Parse ``MM:SS`` or ``MM:SS.cc`` (hundredths) into seconds."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if not isinstance(value, str):
        return 0.0

    match = _MM_SS_FRACTION.match(value)
    if match:
        minutes, secs, hundredths = (int(g) for g in match.groups())
        return minutes * 60 + secs + hundredths / 100

    match = _MM_SS.match(value)
    if match:
        minutes, secs = (int(g) for g in match.groups())
        return float(minutes * 60 + secs)

    return 0.0


def parse_duration(value: Any) -> float:
    """Parse a ``"5s"`` / ``"2.5s"`` duration string into seconds."""
    if not isinstance(value, str):
        return 0.0
    match = _SECONDS_SUFFIX.match(value)
    return float(match.group(1)) if match else 0.0


def parse_time_limit(value: Any) -> Any:
    """Normalize a limit value written as ``"MM:SS"``, ``"30s"`` or ``"30"``.

    Non-string input is returned unchanged so numeric limits pass through.
    Strings that match none of the formats are also returned unchanged.
    """
    if not isinstance(value, str):
        return value

    match = _MM_SS.match(value)
    if match:
        minutes, secs = (int(g) for g in match.groups())
        return float(minutes * 60 + secs)

    match = _SECONDS_SUFFIX.match(value)
    if match:
        return float(match.group(1))

    try:
        return float(value)
    except ValueError:
        return value


def format_remaining_time(seconds: float) -> str:
    """Human-readable countdown: ``"2:05 min"`` above a minute, else ``"12.5s"``."""
    if seconds >= 60:
        return f"{int(seconds // 60)}:{int(seconds % 60):02d} min"
    return f"{seconds:.1f}s"
