"""Threshold estimate produced by the detector."""

from __future__ import annotations

from dataclasses import dataclass

from threshold_engine.models.enums import DetectionMethod


@dataclass(frozen=True)
class ThresholdEstimate:
    """Aerobic and anaerobic threshold for one athlete at one point in time.

    Paces are in seconds per km, so the anaerobic threshold (the faster
    pace) always has the smaller value.

    Attributes:
        aerobic_pace_s_per_km: Pace at the aerobic threshold (LT1).
        aerobic_hr_bpm: Heart rate at the aerobic threshold.
        anaerobic_pace_s_per_km: Pace at the anaerobic threshold (LT2),
            used as critical pace for zone derivation.
        anaerobic_hr_bpm: Heart rate at the anaerobic threshold.
        method: Detection step that produced the estimate.
        samples_used: Number of samples the detector saw.
    """

    aerobic_pace_s_per_km: float
    aerobic_hr_bpm: float
    anaerobic_pace_s_per_km: float
    anaerobic_hr_bpm: float
    method: DetectionMethod = DetectionMethod.SLOPE_INFLECTION
    samples_used: int = 0

    @property
    def critical_pace_s_per_km(self) -> float:
        """Critical pace is the anaerobic-threshold pace."""
        return self.anaerobic_pace_s_per_km
