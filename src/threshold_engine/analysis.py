"""Structured session analysis handed to the coaching-narrative collaborator.

The engine never writes prose; it hands over a plain dict describing the
session against the athlete's zones, plus the questions the narrative
should answer.
"""

from __future__ import annotations

import math
from typing import Any

from threshold_engine.math.pace import format_pace, format_pace_range, speed_to_pace_s_per_km
from threshold_engine.math.zones import classify_pace
from threshold_engine.models.athlete_profile import AthleteProfile
from threshold_engine.models.enums import ZoneType
from threshold_engine.models.session import RawSession

NO_ZONES_LABEL = "Unknown (no zones set)"

COACHING_QUESTIONS = (
    "Was this session in the correct zone for its intended purpose?",
    "Is the HR proportionate to the pace (cardiac drift, heat, fatigue)?",
    "Does this fit the weekly periodization plan?",
    "Any patterns across recent sessions worth noting?",
)


def zone_summary(profile: AthleteProfile) -> dict[str, str]:
    """Readable M:SS pace band per zone, e.g. {'Z4 Threshold': '3:53-4:19'}."""
    if profile.zones is None:
        return {}
    return {
        f"Z{z.zone.value} {z.name}": format_pace_range(z.lower, z.upper)
        for z in profile.zones.zones
    }


def _session_pace(session: RawSession) -> float | None:
    speed = session.average_speed_m_per_s
    if not math.isfinite(speed) or speed <= 0:
        return None
    return speed_to_pace_s_per_km(speed)


def _zone_label(pace: float | None, profile: AthleteProfile) -> str:
    if profile.zones is None:
        return NO_ZONES_LABEL
    if pace is None:
        return "Unknown"
    zone = profile.zones.get(classify_pace(pace, profile.zones))
    return f"Z{zone.zone.value} - {zone.name}"


def analyze_session(session: RawSession, profile: AthleteProfile) -> dict[str, Any]:
    """Build the analysis payload for one session."""
    pace = _session_pace(session)
    critical = profile.critical_pace_s_per_km
    zone2 = profile.zones.get(ZoneType.ZONE_2) if profile.zones else None
    zone4 = profile.zones.get(ZoneType.ZONE_4) if profile.zones else None

    return {
        "activity": {
            "name": session.name,
            "type": session.activity_kind,
            "date": session.start_time.date().isoformat() if session.start_time else None,
            "distance_km": (
                round(session.distance_m / 1000.0, 2) if session.distance_m is not None else None
            ),
            "duration_min": round(session.duration_s / 60),
            "avg_pace_min_km": format_pace(pace) if pace is not None else None,
            "avg_hr": session.average_hr_bpm,
            "max_hr": session.max_hr_bpm,
            "suffer_score": session.effort_score,
        },
        "coaching_context": {
            "zone_classification": _zone_label(pace, profile),
            "critical_pace": format_pace(critical) if critical is not None else None,
            "zone2_range": format_pace_range(zone2.lower, zone2.upper) if zone2 else None,
            "zone4_range": format_pace_range(zone4.lower, zone4.upper) if zone4 else None,
        },
        "coaching_questions": list(COACHING_QUESTIONS),
    }
