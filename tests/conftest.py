"""Shared test fixtures: session histories, samples, calibrated profiles."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from threshold_engine.math.zones import derive_zones
from threshold_engine.models.athlete_profile import AthleteProfile
from threshold_engine.models.enums import DetectionMethod
from threshold_engine.models.session import RawSession, SessionSample
from threshold_engine.models.thresholds import ThresholdEstimate

_START = datetime(2026, 9, 1, 7, 0, tzinfo=timezone.utc)

# Slow -> fast. HR rises 1 bpm per 10 s/km except a 19 bpm jump after
# 370 s/km and a 28 bpm jump after 320 s/km: the slope step finds
# LT1 at 370 s/km / 133 bpm and LT2 at 320 s/km / 156 bpm.
INFLECTION_PACES = (400.0, 390.0, 380.0, 370.0, 360.0, 350.0, 340.0, 330.0, 320.0, 310.0)
INFLECTION_HRS = (130.0, 131.0, 132.0, 133.0, 152.0, 153.0, 154.0, 155.0, 156.0, 184.0)

# The six-session scenario: all qualify, the HR trim leaves four.
SCENARIO_PACES = (360.0, 350.0, 340.0, 320.0, 300.0, 280.0)
SCENARIO_HRS = (130.0, 135.0, 140.0, 150.0, 165.0, 180.0)


def make_raw(
    pace: float,
    hr: float | None,
    duration_s: int = 1200,
    session_id: str | None = None,
    kind: str = "Run",
    effort_score: float | None = None,
    start_time: datetime | None = None,
) -> RawSession:
    """RawSession running at ``pace`` s/km."""
    return RawSession(
        activity_kind=kind,
        average_speed_m_per_s=1000.0 / pace,
        duration_s=duration_s,
        average_hr_bpm=hr,
        effort_score=effort_score,
        start_time=start_time,
        session_id=session_id,
    )


def make_sample(pace: float, hr: float, session_id: str | None = None) -> SessionSample:
    return SessionSample(pace_s_per_km=pace, hr_bpm=hr, duration_s=1200, session_id=session_id)


@pytest.fixture
def raw_session_factory() -> Callable[..., RawSession]:
    """Factory fixture for RawSession instances.

    Usage:
        session = raw_session_factory(300.0, 150.0, duration_s=600)
    """
    return make_raw


@pytest.fixture
def inflection_samples() -> list[SessionSample]:
    """Ten samples with clear aerobic and anaerobic inflections."""
    return [
        make_sample(pace, hr, session_id=f"s{i}")
        for i, (pace, hr) in enumerate(zip(INFLECTION_PACES, INFLECTION_HRS))
    ]


@pytest.fixture
def inflection_history() -> list[RawSession]:
    """Twelve runs over five weeks: the inflection samples plus two HR outliers.

    The outliers (lowest and highest HR) are exactly what the 10% trim
    removes, leaving the inflection samples.
    """
    sessions = [
        make_raw(pace, hr, session_id=f"s{i}", start_time=_START + timedelta(days=3 * i))
        for i, (pace, hr) in enumerate(zip(INFLECTION_PACES, INFLECTION_HRS))
    ]
    sessions.append(
        make_raw(420.0, 120.0, session_id="low", start_time=_START + timedelta(days=31))
    )
    sessions.append(
        make_raw(300.0, 195.0, session_id="high", start_time=_START + timedelta(days=32))
    )
    return sessions


@pytest.fixture
def scenario_history() -> list[RawSession]:
    """Six 20-minute runs, HR 130-180 bpm, pace 6:00-4:40/km."""
    return [
        make_raw(pace, hr, session_id=f"r{i}", start_time=_START + timedelta(days=i))
        for i, (pace, hr) in enumerate(zip(SCENARIO_PACES, SCENARIO_HRS))
    ]


@pytest.fixture
def calibrated_profile() -> AthleteProfile:
    """Profile with LT1 at 5:00/km and LT2 (critical pace) at 4:10/km."""
    thresholds = ThresholdEstimate(
        aerobic_pace_s_per_km=300.0,
        aerobic_hr_bpm=150.0,
        anaerobic_pace_s_per_km=250.0,
        anaerobic_hr_bpm=172.0,
        method=DetectionMethod.SLOPE_INFLECTION,
        samples_used=10,
    )
    return AthleteProfile(
        athlete_id="athlete-1",
        thresholds=thresholds,
        zones=derive_zones(250.0),
        ratings_since_recalc=0,
    )
