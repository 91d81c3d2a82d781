"""Tests for normalized config values: position locks, repeat specs, limits."""

from __future__ import annotations

import pytest

from ghosting_engine.models.config import (
    EffectiveConfig,
    FixedRepeat,
    IntervalOffset,
    Limits,
    PositionLock,
    RandomRepeat,
    parse_repeat_count,
)
from ghosting_engine.models.enums import (
    IntervalOffsetType,
    IntervalType,
    IterationType,
    LimitType,
    PositionKind,
    SplitStepSpeed,
)


class TestPositionLock:
    @pytest.mark.parametrize(
        "raw,kind",
        [
            ("normal", PositionKind.NORMAL),
            ("linked", PositionKind.LINKED),
            ("last", PositionKind.LAST),
            (None, PositionKind.NORMAL),
            ("sideways", PositionKind.NORMAL),
            ("0", PositionKind.NORMAL),
        ],
    )
    def test_parse_kinds(self, raw, kind) -> None:
        assert PositionLock.parse(raw).kind == kind

    def test_digit_string_is_fixed_slot(self) -> None:
        lock = PositionLock.parse("3")
        assert lock.kind == PositionKind.FIXED
        assert lock.slot == 3
        assert lock.is_slot(3)
        assert not lock.is_slot(1)

    def test_wire_round_trip(self) -> None:
        for raw in ("normal", "linked", "last", "2"):
            assert PositionLock.parse(raw).to_wire() == raw


class TestParseRepeatCount:
    def test_none_means_unset(self) -> None:
        assert parse_repeat_count(None) is None

    def test_bare_integer_is_fixed(self) -> None:
        assert parse_repeat_count(4) == FixedRepeat(4)

    def test_bare_zero_coerces_to_one(self) -> None:
        assert parse_repeat_count(0) == FixedRepeat(1)

    def test_typed_fixed(self) -> None:
        assert parse_repeat_count({"type": "fixed", "count": 3}) == FixedRepeat(3)

    def test_typed_random(self) -> None:
        assert parse_repeat_count({"type": "random", "min": 1, "max": 4}) == RandomRepeat(1, 4)

    def test_untyped_object_is_random(self) -> None:
        assert parse_repeat_count({"min": 2, "max": 5}) == RandomRepeat(2, 5)

    def test_random_max_defaults_to_min(self) -> None:
        assert parse_repeat_count({"type": "random", "min": 2}) == RandomRepeat(2, 2)

    def test_garbage_is_single_play(self) -> None:
        assert parse_repeat_count("lots") == FixedRepeat(1)


class TestLimits:
    def test_default_is_all_shots(self) -> None:
        limits = Limits.from_config({})
        assert limits.type == LimitType.ALL_SHOTS
        assert not limits.is_capped

    def test_shot_limit(self) -> None:
        limits = Limits.from_config({"limits": {"type": "shot-limit", "value": 5}})
        assert limits.type == LimitType.SHOT_LIMIT
        assert limits.value == 5.0
        assert limits.is_capped

    def test_limit_without_value_is_uncapped(self) -> None:
        limits = Limits.from_config({"limits": {"type": "time-limit"}})
        assert limits.type == LimitType.ALL_SHOTS

    def test_legacy_all_entries(self) -> None:
        assert Limits.from_config({"limits": {"type": "all-entries"}}).type == LimitType.ALL_SHOTS


class TestEffectiveConfig:
    def test_defaults(self) -> None:
        config = EffectiveConfig.from_mapping({})
        assert config.interval == 5.0
        assert config.shot_announcement_lead_time == 2.5
        assert config.split_step_speed == SplitStepSpeed.AUTO_SCALE
        assert config.iteration_type == IterationType.IN_ORDER
        assert config.voice == "Default"
        assert config.speech_rate == 1.0
        assert config.interval_offset is None
        assert config.countdown is False
        assert config.skip_at_end_of_workout is False

    def test_reads_wire_values(self) -> None:
        config = EffectiveConfig.from_mapping(
            {
                "interval": 3.5,
                "intervalOffset": {"min": 0.5, "max": 1.5},
                "intervalOffsetType": "random",
                "splitStepSpeed": "fast",
                "iterationType": "shuffle",
                "intervalType": "additional",
                "countdown": True,
            }
        )
        assert config.interval == 3.5
        assert config.interval_offset == IntervalOffset(0.5, 1.5)
        assert config.interval_offset_type == IntervalOffsetType.RANDOM
        assert config.split_step_speed == SplitStepSpeed.FAST
        assert config.iteration_type == IterationType.SHUFFLE
        assert config.interval_type == IntervalType.ADDITIONAL
        assert config.countdown is True

    def test_explicit_zero_interval_is_kept(self) -> None:
        assert EffectiveConfig.from_mapping({"interval": 0}).interval == 0.0

    def test_invalid_values_fall_back(self) -> None:
        config = EffectiveConfig.from_mapping(
            {"interval": "fast", "splitStepSpeed": "warp", "speechRate": -1}
        )
        assert config.interval == 5.0
        assert config.split_step_speed == SplitStepSpeed.AUTO_SCALE
        assert config.speech_rate == 1.0
