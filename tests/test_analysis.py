"""Tests for the session analysis payload."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from threshold_engine.analysis import (
    COACHING_QUESTIONS,
    NO_ZONES_LABEL,
    analyze_session,
    zone_summary,
)
from threshold_engine.math.zones import derive_zones
from threshold_engine.models.athlete_profile import AthleteProfile
from threshold_engine.models.session import RawSession
from threshold_engine.models.thresholds import ThresholdEstimate


@pytest.fixture
def profile_240() -> AthleteProfile:
    """Critical pace exactly 4:00/km."""
    return AthleteProfile(
        athlete_id="athlete-1",
        thresholds=ThresholdEstimate(290.0, 150.0, 240.0, 172.0),
        zones=derive_zones(240.0),
    )


@pytest.fixture
def threshold_run() -> RawSession:
    return RawSession(
        activity_kind="Run",
        average_speed_m_per_s=1000.0 / 240.0,
        duration_s=2400,
        average_hr_bpm=171.0,
        effort_score=120.0,
        start_time=datetime(2026, 10, 3, 7, 30, tzinfo=timezone.utc),
        session_id="99",
        name="Threshold 2x20",
        distance_m=10000.0,
        max_hr_bpm=181.0,
    )


class TestZoneSummary:
    def test_all_zones_formatted(self, profile_240) -> None:
        assert zone_summary(profile_240) == {
            "Z1 Recovery": "slower than 5:24",
            "Z2 Aerobic Base": "4:48-5:24",
            "Z3 Tempo": "4:19-4:48",
            "Z4 Threshold": "3:53-4:19",
            "Z5 Max Effort": "faster than 3:53",
        }

    def test_no_zones(self) -> None:
        assert zone_summary(AthleteProfile()) == {}


class TestAnalyzeSession:
    def test_activity_block(self, threshold_run, profile_240) -> None:
        activity = analyze_session(threshold_run, profile_240)["activity"]
        assert activity["name"] == "Threshold 2x20"
        assert activity["type"] == "Run"
        assert activity["date"] == "2026-10-03"
        assert activity["distance_km"] == 10.0
        assert activity["duration_min"] == 40
        assert activity["avg_pace_min_km"] == "4:00"
        assert activity["avg_hr"] == 171.0
        assert activity["max_hr"] == 181.0
        assert activity["suffer_score"] == 120.0

    def test_coaching_context(self, threshold_run, profile_240) -> None:
        context = analyze_session(threshold_run, profile_240)["coaching_context"]
        assert context["zone_classification"] == "Z4 - Threshold"
        assert context["critical_pace"] == "4:00"
        assert context["zone2_range"] == "4:48-5:24"
        assert context["zone4_range"] == "3:53-4:19"

    def test_questions_attached(self, threshold_run, profile_240) -> None:
        payload = analyze_session(threshold_run, profile_240)
        assert payload["coaching_questions"] == list(COACHING_QUESTIONS)

    def test_easy_run_classified(self, profile_240) -> None:
        easy = RawSession(
            activity_kind="Run", average_speed_m_per_s=1000.0 / 300.0, duration_s=3600
        )
        context = analyze_session(easy, profile_240)["coaching_context"]
        assert context["zone_classification"] == "Z2 - Aerobic Base"

    def test_profile_without_zones(self, threshold_run) -> None:
        context = analyze_session(threshold_run, AthleteProfile())["coaching_context"]
        assert context["zone_classification"] == NO_ZONES_LABEL
        assert context["critical_pace"] is None
        assert context["zone2_range"] is None
        assert context["zone4_range"] is None

    def test_session_without_speed(self, profile_240) -> None:
        stopped = RawSession(activity_kind="Run", average_speed_m_per_s=0.0, duration_s=600)
        payload = analyze_session(stopped, profile_240)
        assert payload["activity"]["avg_pace_min_km"] is None
        assert payload["activity"]["date"] is None
        assert payload["activity"]["distance_km"] is None
        assert payload["coaching_context"]["zone_classification"] == "Unknown"
