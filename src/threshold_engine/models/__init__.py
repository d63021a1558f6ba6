"""Data models for the threshold engine."""

from threshold_engine.models.athlete_profile import AthleteProfile
from threshold_engine.models.enums import (
    DetectionMethod,
    HrAnchoring,
    OutcomeStatus,
    ZoneType,
)
from threshold_engine.models.session import EffortRating, RawSession, SessionSample
from threshold_engine.models.thresholds import ThresholdEstimate
from threshold_engine.models.zone_profile import PaceZone, ZoneProfile

__all__ = [
    "AthleteProfile",
    "DetectionMethod",
    "EffortRating",
    "HrAnchoring",
    "OutcomeStatus",
    "PaceZone",
    "RawSession",
    "SessionSample",
    "ThresholdEstimate",
    "ZoneProfile",
    "ZoneType",
]
