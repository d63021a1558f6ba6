"""Tests for pace conversion and formatting."""

import pytest

from threshold_engine.math.pace import (
    format_pace,
    format_pace_range,
    speed_to_pace_s_per_km,
)


class TestSpeedToPace:
    def test_four_metres_per_second(self) -> None:
        assert speed_to_pace_s_per_km(4.0) == pytest.approx(250.0)

    @pytest.mark.parametrize("bad", [0.0, -2.0, float("nan"), float("inf")])
    def test_rejects_unusable_speed(self, bad: float) -> None:
        with pytest.raises(ValueError):
            speed_to_pace_s_per_km(bad)


class TestFormatPace:
    def test_minutes_and_seconds(self) -> None:
        assert format_pace(305.0) == "5:05"

    def test_rounds_to_nearest_second(self) -> None:
        assert format_pace(299.6) == "5:00"

    @pytest.mark.parametrize("bad", [0.0, -5.0, float("nan")])
    def test_invalid(self, bad: float) -> None:
        assert format_pace(bad) == "--"


class TestFormatPaceRange:
    def test_closed_band(self) -> None:
        assert format_pace_range(288.0, 324.0) == "4:48-5:24"

    def test_open_fast_end(self) -> None:
        assert format_pace_range(None, 232.8) == "faster than 3:53"

    def test_open_slow_end(self) -> None:
        assert format_pace_range(324.0, None) == "slower than 5:24"

    def test_both_open(self) -> None:
        assert format_pace_range(None, None) == "--"
