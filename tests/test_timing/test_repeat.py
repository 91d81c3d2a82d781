"""Tests for repeat-count resolution (timing/repeat.py)."""

from __future__ import annotations

from ghosting_engine.models.config import FixedRepeat, RandomRepeat
from ghosting_engine.timing.repeat import resolve_repeat_count


class TestFixedRepeat:
    def test_unset_plays_once(self) -> None:
        assert resolve_repeat_count(None) == 1

    def test_fixed_count(self) -> None:
        assert resolve_repeat_count(FixedRepeat(3)) == 3

    def test_fixed_zero_plays_once(self) -> None:
        assert resolve_repeat_count(FixedRepeat(0)) == 1


class TestRandomRepeat:
    def test_degenerate_range(self) -> None:
        assert resolve_repeat_count(RandomRepeat(2, 2), seed=5) == 2

    def test_zero_range_skips(self) -> None:
        assert resolve_repeat_count(RandomRepeat(0, 0)) == 0

    def test_inverted_range_clamps_to_min(self) -> None:
        assert resolve_repeat_count(RandomRepeat(5, 2), seed=1) == 5

    def test_negative_min_clamps_to_zero(self) -> None:
        assert resolve_repeat_count(RandomRepeat(-3, 0)) == 0

    def test_seeded_draws_are_stable_and_in_range(self) -> None:
        spec = RandomRepeat(1, 4)
        first = [resolve_repeat_count(spec, seed=11, call_count=i) for i in range(20)]
        second = [resolve_repeat_count(spec, seed=11, call_count=i) for i in range(20)]
        assert first == second
        assert all(1 <= count <= 4 for count in first)

    def test_unseeded_in_range(self) -> None:
        spec = RandomRepeat(2, 3)
        assert all(2 <= resolve_repeat_count(spec) <= 3 for _ in range(50))
