"""Engine configuration: tunable heuristics with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass

from threshold_engine.models.enums import (
    DEFAULT_HR_ANCHORING,
    DEFAULT_LOOKBACK_DAYS,
    MAX_EFFORT_SCORE,
    MIN_QUALIFYING_SESSIONS,
    MIN_SESSION_DURATION_S,
    OUTLIER_TRIM_FRACTION,
    RATINGS_PER_REDETECTION,
    RECALIBRATION_STEP_S_PER_KM,
    RUN_ACTIVITY_KINDS,
    THRESHOLD_PACE_BAND,
    HrAnchoring,
)


@dataclass(frozen=True)
class EngineConfig:
    """Knobs for one deployment of the engine.

    Defaults come from ``threshold_engine.models.enums``. The heart-rate
    anchoring policy is part of the configuration so every estimate for an
    athlete is made the same way.
    """

    min_duration_s: int = MIN_SESSION_DURATION_S
    trim_fraction: float = OUTLIER_TRIM_FRACTION
    min_samples: int = MIN_QUALIFYING_SESSIONS
    lookback_days: int = DEFAULT_LOOKBACK_DAYS
    max_effort_score: float = MAX_EFFORT_SCORE
    activity_kinds: frozenset[str] = RUN_ACTIVITY_KINDS
    hr_anchoring: HrAnchoring = DEFAULT_HR_ANCHORING
    threshold_pace_band: float = THRESHOLD_PACE_BAND
    recalibration_step_s: float = RECALIBRATION_STEP_S_PER_KM
    ratings_per_redetection: int = RATINGS_PER_REDETECTION

    def __post_init__(self) -> None:
        if self.min_duration_s < 0:
            raise ValueError(f"min_duration_s must be >= 0, got {self.min_duration_s}")
        if not 0.0 <= self.trim_fraction < 0.5:
            raise ValueError(f"trim_fraction must be in [0, 0.5), got {self.trim_fraction}")
        if self.min_samples < 1:
            raise ValueError(f"min_samples must be >= 1, got {self.min_samples}")
        if self.lookback_days < 1:
            raise ValueError(f"lookback_days must be >= 1, got {self.lookback_days}")
        if self.ratings_per_redetection < 1:
            raise ValueError(
                f"ratings_per_redetection must be >= 1, got {self.ratings_per_redetection}"
            )

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config, overriding defaults from THRESHOLD_* variables."""
        return cls(
            min_duration_s=int(
                os.environ.get("THRESHOLD_MIN_DURATION_S", MIN_SESSION_DURATION_S)
            ),
            trim_fraction=float(
                os.environ.get("THRESHOLD_TRIM_FRACTION", OUTLIER_TRIM_FRACTION)
            ),
            min_samples=int(
                os.environ.get("THRESHOLD_MIN_SAMPLES", MIN_QUALIFYING_SESSIONS)
            ),
            lookback_days=int(
                os.environ.get("THRESHOLD_LOOKBACK_DAYS", DEFAULT_LOOKBACK_DAYS)
            ),
            hr_anchoring=HrAnchoring(
                os.environ.get("THRESHOLD_HR_ANCHORING", DEFAULT_HR_ANCHORING.value)
            ),
        )
