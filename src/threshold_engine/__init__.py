"""Threshold engine — training thresholds and pace zones from session history."""

from threshold_engine.arena import EstimationOutcome, ProfileArena, RatingOutcome
from threshold_engine.config import EngineConfig
from threshold_engine.engine import ThresholdEngine
from threshold_engine.exceptions import (
    DegenerateEstimateError,
    InsufficientDataError,
    InvalidRatingError,
    ThresholdEngineError,
)

__all__ = [
    "DegenerateEstimateError",
    "EngineConfig",
    "EstimationOutcome",
    "InsufficientDataError",
    "InvalidRatingError",
    "ProfileArena",
    "RatingOutcome",
    "ThresholdEngine",
    "ThresholdEngineError",
]
