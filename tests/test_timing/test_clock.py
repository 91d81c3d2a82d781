"""Tests for time-string helpers (timing/clock.py)."""

from __future__ import annotations

import pytest

from ghosting_engine.timing.clock import (
    format_remaining_time,
    parse_duration,
    parse_time_limit,
    seconds_to_time_str,
    time_str_to_seconds,
)


class TestSecondsToTimeStr:
    def test_minutes_and_seconds(self):
        assert seconds_to_time_str(65) == "01:05"

    def test_precise_hundredths(self):
        assert seconds_to_time_str(65.5, precise=True) == "01:05.50"

    def test_high_precision_milliseconds(self):
        assert seconds_to_time_str(1.5, high_precision=True) == "00:01.500"

    def test_negative_is_zero(self):
        assert seconds_to_time_str(-3) == "00:00"

    def test_non_numeric_is_zero(self):
        assert seconds_to_time_str("abc", precise=True) == "00:00.00"


class TestTimeStrToSeconds:
    @pytest.mark.parametrize(
        "text,expected",
        [("01:30", 90.0), ("00:05", 5.0), ("01:30.50", 90.5), ("bad", 0.0)],
    )
    def test_parse(self, text, expected):
        assert time_str_to_seconds(text) == pytest.approx(expected)

    def test_numbers_pass_through(self):
        assert time_str_to_seconds(12) == 12.0


class TestParseDuration:
    def test_seconds_suffix(self):
        assert parse_duration("5s") == 5.0
        assert parse_duration("2.5s") == 2.5

    def test_without_suffix_is_zero(self):
        assert parse_duration("5") == 0.0
        assert parse_duration(None) == 0.0


class TestParseTimeLimit:
    def test_formats(self):
        assert parse_time_limit("02:00") == 120.0
        assert parse_time_limit("30s") == 30.0
        assert parse_time_limit("45") == 45.0

    def test_zero_seconds(self):
        assert parse_time_limit("0s") == 0.0
        assert parse_time_limit("00:00") == 0.0

    def test_number_passes_through(self):
        assert parse_time_limit(30) == 30

    def test_unparseable_string_is_returned(self):
        assert parse_time_limit("soon") == "soon"


class TestFormatRemainingTime:
    def test_minutes(self):
        assert format_remaining_time(125) == "2:05 min"

    def test_seconds(self):
        assert format_remaining_time(12.5) == "12.5s"
