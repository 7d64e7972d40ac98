"""Tests for swim time parsing and formatting."""

import math

import pytest

from tunas.services.time_codec import MalformedTimeError, format_seconds, parse_time


class TestParseTime:
    """Tests for parse_time."""

    def test_minutes_and_seconds(self):
        assert parse_time("1:05.40") == pytest.approx(65.4)

    def test_seconds_only(self):
        assert parse_time("45.20") == pytest.approx(45.2)

    def test_distance_event_time(self):
        assert parse_time("16:32.09") == pytest.approx(992.09)

    def test_whole_seconds(self):
        assert parse_time("30") == 30.0

    def test_surrounding_whitespace_ignored(self):
        assert parse_time(" 58.12 ") == pytest.approx(58.12)

    @pytest.mark.parametrize(
        "value",
        ["", "1:2:3", ":30.00", "1:", "-1:05.40", "abc", "1:xx", "NT", "45.20.1", "1 : 05"],
    )
    def test_malformed_rejected(self, value):
        with pytest.raises(MalformedTimeError) as exc_info:
            parse_time(value)
        assert exc_info.value.time_str == value

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError):
            parse_time("DQ")

    def test_non_string_rejected(self):
        with pytest.raises(MalformedTimeError):
            parse_time(None)  # type: ignore[arg-type]


class TestFormatSeconds:
    """Tests for format_seconds."""

    def test_over_a_minute_zero_pads_seconds(self):
        assert format_seconds(65.4) == "1:05.40"

    def test_under_a_minute(self):
        assert format_seconds(45.2) == "45.20"

    def test_exactly_one_minute(self):
        assert format_seconds(60) == "1:00.00"

    def test_zero(self):
        assert format_seconds(0) == "0.00"

    def test_rounding_carries_into_minutes(self):
        assert format_seconds(119.999) == "2:00.00"

    def test_long_distance(self):
        assert format_seconds(992.09) == "16:32.09"

    @pytest.mark.parametrize("value", [-0.01, math.nan, math.inf])
    def test_invalid_values_rejected(self, value):
        with pytest.raises(ValueError):
            format_seconds(value)

    @pytest.mark.parametrize("seconds", [0.0, 9.4, 59.99, 60.0, 69.4, 992.09, 5999.99])
    def test_parse_reverses_format(self, seconds):
        assert parse_time(format_seconds(seconds)) == pytest.approx(seconds, abs=0.01)
