"""JSON-compatible serialization of AthleteProfile.

The storage collaborator persists these dicts; zones are stored for
readers but re-derived from critical pace on load so they can never drift
from the stored threshold.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json
from typing import Any

from threshold_engine.math.zones import derive_zones
from threshold_engine.models.athlete_profile import AthleteProfile
from threshold_engine.models.enums import DetectionMethod
from threshold_engine.models.thresholds import ThresholdEstimate
from threshold_engine.models.zone_profile import ZoneProfile

_SCHEMA_VERSION = 1


def _thresholds_to_dict(estimate: ThresholdEstimate) -> dict[str, Any]:
    return {
        "aerobic_pace_s_per_km": estimate.aerobic_pace_s_per_km,
        "aerobic_hr_bpm": estimate.aerobic_hr_bpm,
        "anaerobic_pace_s_per_km": estimate.anaerobic_pace_s_per_km,
        "anaerobic_hr_bpm": estimate.anaerobic_hr_bpm,
        "method": estimate.method.name,
        "samples_used": estimate.samples_used,
    }


def _thresholds_from_dict(data: dict[str, Any]) -> ThresholdEstimate:
    return ThresholdEstimate(
        aerobic_pace_s_per_km=float(data["aerobic_pace_s_per_km"]),
        aerobic_hr_bpm=float(data["aerobic_hr_bpm"]),
        anaerobic_pace_s_per_km=float(data["anaerobic_pace_s_per_km"]),
        anaerobic_hr_bpm=float(data["anaerobic_hr_bpm"]),
        method=DetectionMethod[data.get("method", DetectionMethod.SLOPE_INFLECTION.name)],
        samples_used=int(data.get("samples_used", 0)),
    )


def _zones_to_dict(zones: ZoneProfile) -> dict[str, Any]:
    return {
        "critical_pace_s_per_km": zones.critical_pace_s_per_km,
        "zones": [
            {"zone": z.zone.value, "name": z.name, "lower": z.lower, "upper": z.upper}
            for z in zones.zones
        ],
    }


def profile_to_dict(profile: AthleteProfile) -> dict[str, Any]:
    """Convert a profile to a JSON-compatible dict."""
    return {
        "schema_version": _SCHEMA_VERSION,
        "athlete_id": profile.athlete_id,
        "thresholds": (
            _thresholds_to_dict(profile.thresholds) if profile.thresholds else None
        ),
        "zones": _zones_to_dict(profile.zones) if profile.zones else None,
        "ratings_since_recalc": profile.ratings_since_recalc,
        "max_hr_bpm": profile.max_hr_bpm,
    }


def profile_from_dict(data: dict[str, Any]) -> AthleteProfile:
    """Rebuild a profile from :func:`profile_to_dict` output.

    Raises:
        ValueError: If the schema version is unknown.
        KeyError: If a threshold field is missing.
    """
    version = data.get("schema_version", _SCHEMA_VERSION)
    if version != _SCHEMA_VERSION:
        raise ValueError(f"Unsupported profile schema version {version}")

    thresholds = None
    zones = None
    if data.get("thresholds"):
        thresholds = _thresholds_from_dict(data["thresholds"])
        zones = derive_zones(thresholds.anaerobic_pace_s_per_km)

    max_hr = data.get("max_hr_bpm")
    return AthleteProfile(
        athlete_id=str(data.get("athlete_id", "")),
        thresholds=thresholds,
        zones=zones,
        ratings_since_recalc=int(data.get("ratings_since_recalc", 0)),
        max_hr_bpm=float(max_hr) if max_hr is not None else None,
    )


def profile_to_json_string(profile: AthleteProfile, indent: int = 2) -> str:
    """Serialize a profile to a JSON string."""
    return json.dumps(profile_to_dict(profile), indent=indent)


def profile_from_json_string(text: str) -> AthleteProfile:
    """Parse a profile from a JSON string."""
    return profile_from_dict(json.loads(text))
