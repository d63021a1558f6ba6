"""Session records: raw platform sessions, filtered samples, effort ratings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RawSession:
    """One completed activity as delivered by the activity platform.

    Fields the platform did not report are None. Nothing here is validated;
    the sample filter decides what is usable.
    """

    activity_kind: str
    average_speed_m_per_s: float
    duration_s: int
    average_hr_bpm: float | None = None
    effort_score: float | None = None
    start_time: datetime | None = None
    session_id: str | None = None
    name: str = ""
    distance_m: float | None = None
    max_hr_bpm: float | None = None


@dataclass(frozen=True)
class SessionSample:
    """A quality-filtered session usable for threshold detection.

    Always carries a finite positive pace and a heart rate; sessions
    without either never become samples.
    """

    pace_s_per_km: float
    hr_bpm: float
    duration_s: int
    effort_score: float | None = None
    session_id: str | None = None
    start_time: datetime | None = None


@dataclass(frozen=True)
class EffortRating:
    """Post-session perceived effort (1-10) for a previously synced session."""

    session_id: str
    rating: int
