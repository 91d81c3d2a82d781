"""Repeat-count resolution for shots and patterns."""

from __future__ import annotations

import random

from ghosting_engine.models.config import FixedRepeat, RandomRepeat, RepeatSpec
from ghosting_engine.timing.randomness import SeededRandom


def resolve_repeat_count(
    spec: RepeatSpec | None, seed: int | None = None, call_count: int = 0
) -> int:
    """Resolve a repeat spec to a concrete count ≥ 0.

    Args:
        spec: Normalized repeat spec; None means "play once".
        seed: Base seed. When given the draw comes from an LCG seeded with
            ``seed + call_count`` so every occurrence gets its own stable draw.
        call_count: Occurrence counter that keys the draw.

    Returns:
        FixedRepeat -> its count (at least 1). RandomRepeat -> an inclusive
        draw from ``[min, max]`` after clamping ``min >= 0`` and
        ``max >= min``. Anything else -> 1.
    """
    if isinstance(spec, FixedRepeat):
        return max(1, int(spec.count))

    if isinstance(spec, RandomRepeat):
        low = max(0, int(spec.min_count))
        high = max(low, int(spec.max_count))
        span = high - low + 1
        if seed is not None:
            draw = SeededRandom(seed + call_count).random()
        else:
            draw = random.random()
        return low + min(int(draw * span), span - 1)

    return 1
