"""Athlete profile — the engine's read-modify-write state for one athlete."""

from __future__ import annotations

from dataclasses import dataclass

from threshold_engine.models.thresholds import ThresholdEstimate
from threshold_engine.models.zone_profile import ZoneProfile


@dataclass(frozen=True)
class AthleteProfile:
    """Current threshold estimate and zones for one athlete.

    Created empty on first contact, populated by the first successful
    estimate, nudged by effort ratings and replaced by each full
    re-detection. Frozen: every engine operation returns a new profile.
    """

    athlete_id: str = ""
    thresholds: ThresholdEstimate | None = None
    zones: ZoneProfile | None = None
    ratings_since_recalc: int = 0
    max_hr_bpm: float | None = None

    @property
    def has_thresholds(self) -> bool:
        return self.thresholds is not None

    @property
    def critical_pace_s_per_km(self) -> float | None:
        if self.thresholds is None:
            return None
        return self.thresholds.anaerobic_pace_s_per_km
