"""Reproducible randomness for timeline generation.

A run that supplies a seed draws every random value (repeat counts, offsets,
split-step speeds, shuffles) from the linear-congruential generator below,
keyed by ``seed + key`` so that independent draws stay reproducible. A run
without a seed falls back to Python's ``random`` module.
"""

from __future__ import annotations

import itertools
import random
from collections.abc import Callable

# glibc-style LCG parameters
_LCG_MULTIPLIER = 1103515245
_LCG_INCREMENT = 12345
_LCG_MODULUS = 2 ** 31
_LCG_SCALE = 2 ** 31 - 1

# Automatic draw keys start far above any realistic shot or superset counter
# so they never collide with the keys the repeat resolver uses.
_AUTO_KEY_BASE = 1 << 20


class SeededRandom:
    """Deterministic LCG returning floats in ``[0, 1]``.

    Note the upper bound is inclusive: ``state / (2**31 - 1)`` can reach 1.0
    for ``state == 2**31 - 1``. Callers that index with the result clamp it.
    """

    def __init__(self, seed: int) -> None:
        self._state = int(seed) % _LCG_MODULUS

    def random(self) -> float:
        self._state = (_LCG_MULTIPLIER * self._state + _LCG_INCREMENT) % _LCG_MODULUS
        return self._state / _LCG_SCALE

    def randint_index(self, upper: int) -> int:
        """Draw an index in ``[0, upper)``."""
        return min(int(self.random() * upper), upper - 1)


def fisher_yates(items: list, rng: Callable[[], float]) -> list:
    """Return a shuffled copy of *items* using the draw function *rng*."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = min(int(rng() * (i + 1)), i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class RandomSource:
    """Per-run source of random draws.

    Args:
        seed: Base seed. ``None`` makes every draw non-deterministic.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._keys = itertools.count(_AUTO_KEY_BASE)

    @property
    def seeded(self) -> bool:
        return self.seed is not None

    def uniform(self, key: int | None = None) -> float:
        """Draw a float in ``[0, 1]``; keyed draws are stable for a given seed."""
        if self.seed is None:
            return random.random()
        if key is None:
            key = next(self._keys)
        return SeededRandom(self.seed + key).random()

    def derive_seed(self) -> int | None:
        """Fresh seed for a sub-generator (e.g. one shuffle), or None."""
        if self.seed is None:
            return None
        return self.seed + next(self._keys)
