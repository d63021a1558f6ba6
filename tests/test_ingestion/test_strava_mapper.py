"""Tests for threshold_engine.ingestion.strava_mapper — pure functions, no mocking needed."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from threshold_engine.config import EngineConfig
from threshold_engine.ingestion.strava_mapper import (
    _extract_kind,
    _parse_start,
    _positive,
    _to_float,
    map_activities,
    map_activity,
)
from threshold_engine.math.sample_filter import is_qualifying


@pytest.fixture
def strava_run() -> dict:
    return {
        "id": 12345678901,
        "name": "Morning Run",
        "type": "Run",
        "sport_type": "Run",
        "distance": 10020.4,
        "moving_time": 2950,
        "elapsed_time": 3012,
        "average_speed": 3.397,
        "average_heartrate": 151.3,
        "max_heartrate": 172.0,
        "suffer_score": 64.0,
        "start_date": "2026-09-14T06:12:45Z",
    }


# ---------------------------------------------------------------------------
# map_activity
# ---------------------------------------------------------------------------


class TestMapActivity:
    def test_full_record(self, strava_run) -> None:
        session = map_activity(strava_run)
        assert session.activity_kind == "Run"
        assert session.average_speed_m_per_s == 3.397
        assert session.duration_s == 2950
        assert session.average_hr_bpm == 151.3
        assert session.max_hr_bpm == 172.0
        assert session.effort_score == 64.0
        assert session.session_id == "12345678901"
        assert session.name == "Morning Run"
        assert session.distance_m == 10020.4
        assert session.start_time == datetime(2026, 9, 14, 6, 12, 45, tzinfo=timezone.utc)

    def test_mapped_run_qualifies(self, strava_run) -> None:
        assert is_qualifying(map_activity(strava_run), EngineConfig())

    def test_elapsed_time_when_moving_time_missing(self, strava_run) -> None:
        del strava_run["moving_time"]
        assert map_activity(strava_run).duration_s == 3012

    def test_no_heart_rate_sensor(self, strava_run) -> None:
        strava_run["average_heartrate"] = 0
        del strava_run["max_heartrate"]
        session = map_activity(strava_run)
        assert session.average_hr_bpm is None
        assert session.max_hr_bpm is None
        assert not is_qualifying(session, EngineConfig())

    def test_empty_dict(self) -> None:
        session = map_activity({})
        assert session.activity_kind == ""
        assert session.average_speed_m_per_s == 0.0
        assert session.duration_s == 0
        assert session.session_id is None
        assert session.start_time is None

    def test_string_numbers_accepted(self, strava_run) -> None:
        strava_run["average_speed"] = "3.5"
        strava_run["moving_time"] = "1800"
        session = map_activity(strava_run)
        assert session.average_speed_m_per_s == 3.5
        assert session.duration_s == 1800


class TestMapActivities:
    def test_skips_non_dicts(self, strava_run) -> None:
        sessions = map_activities([strava_run, None, "junk", {"type": "Ride"}])
        assert [s.activity_kind for s in sessions] == ["Run", "Ride"]

    def test_empty_list(self) -> None:
        assert map_activities([]) == []


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------


class TestExtractKind:
    def test_prefers_type(self) -> None:
        assert _extract_kind({"type": "Run", "sport_type": "TrailRun"}) == "Run"

    def test_falls_back_to_sport_type(self) -> None:
        assert _extract_kind({"sport_type": "TrailRun"}) == "TrailRun"


class TestToFloat:
    @pytest.mark.parametrize("value", [None, "abc", float("nan"), [1]])
    def test_unusable(self, value) -> None:
        assert _to_float(value) is None

    def test_int(self) -> None:
        assert _to_float(3) == 3.0


class TestPositive:
    def test_zero_is_missing(self) -> None:
        assert _positive(0.0) is None

    def test_positive_kept(self) -> None:
        assert _positive(140.0) == 140.0


class TestParseStart:
    def test_offset_timestamp(self) -> None:
        parsed = _parse_start("2026-09-14T08:12:45+02:00")
        assert parsed.utcoffset().total_seconds() == 7200

    def test_timestamp_without_offset_is_utc(self) -> None:
        parsed = _parse_start("2026-09-14T06:12:45")
        assert parsed == datetime(2026, 9, 14, 6, 12, 45, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "yesterday", 1700000000])
    def test_unparseable(self, value) -> None:
        assert _parse_start(value) is None
