"""Threshold detection from the pace vs heart-rate relationship.

As running pace improves, heart rate rises roughly linearly until the
aerobic threshold, then disproportionately faster, with a second sharp
rise at the anaerobic threshold. Detection runs as two explicit steps:

1. Slope inflection: look for the points where the heart-rate rise per
   second of pace improvement jumps above the mean. Returns an estimate
   only when both thresholds are found, otherwise None.
2. Heart-rate anchors: place both thresholds at fixed heart-rate targets
   and interpolate the matching paces. Runs whenever step 1 returns None.

References:
    Seiler (2010). What is best practice for training intensity and
    duration distribution in endurance athletes? Int J Sports Physiol
    Perform 5(3):276-291.

    Esteve-Lanao et al. (2005). How do endurance runners actually train?
    Med Sci Sports Exerc 37(3):496-504.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Sequence

import numpy as np
import pandas as pd

from threshold_engine.exceptions import DegenerateEstimateError, InsufficientDataError
from threshold_engine.models.enums import (
    AEROBIC_HR_RANGE_FRACTION,
    AEROBIC_MAX_HR_FRACTION,
    AEROBIC_SEARCH_FRACTION,
    AEROBIC_SLOPE_MULTIPLIER,
    ANAEROBIC_HR_RANGE_FRACTION,
    ANAEROBIC_MAX_HR_FRACTION,
    ANAEROBIC_SLOPE_MULTIPLIER,
    DEFAULT_HR_ANCHORING,
    MIN_SLOPE_POINTS,
    SLOPE_SMOOTHING_WINDOW,
    DetectionMethod,
    HrAnchoring,
)
from threshold_engine.models.session import SessionSample
from threshold_engine.models.thresholds import ThresholdEstimate

logger = logging.getLogger(__name__)


def sort_by_pace(samples: Sequence[SessionSample]) -> list[SessionSample]:
    """Order samples slowest (largest s/km) to fastest."""
    return sorted(samples, key=lambda s: s.pace_s_per_km, reverse=True)


# ---------------------------------------------------------------------------
# Step 1: slope inflection
# ---------------------------------------------------------------------------


def slope_points(samples: Sequence[SessionSample]) -> pd.DataFrame:
    """HR rise per s/km of pace improvement between consecutive samples.

    Samples are ordered slow to fast. Pairs with no pace improvement are
    skipped. Each row carries the pace and HR of the faster sample of the
    pair.

    Returns:
        DataFrame with columns ``pace``, ``hr`` and ``slope``.
    """
    ordered = sort_by_pace(samples)
    paces = np.array([s.pace_s_per_km for s in ordered], dtype=np.float64)
    hrs = np.array([s.hr_bpm for s in ordered], dtype=np.float64)

    pace_delta = paces[:-1] - paces[1:]  # positive = getting faster
    hr_delta = hrs[1:] - hrs[:-1]
    valid = pace_delta > 0

    return pd.DataFrame(
        {
            "pace": paces[1:][valid],
            "hr": hrs[1:][valid],
            "slope": hr_delta[valid] / pace_delta[valid],
        }
    )


def smooth_slopes(points: pd.DataFrame, window: int = SLOPE_SMOOTHING_WINDOW) -> pd.DataFrame:
    """Centered moving average of the slope column.

    Edge rows without a full window are dropped, so ``n`` points become
    ``n - window + 1`` smoothed points.
    """
    smoothed = points.assign(slope=points["slope"].rolling(window, center=True).mean())
    return smoothed.dropna(subset=["slope"]).reset_index(drop=True)


def _first_above(points: pd.DataFrame, limit: float) -> tuple[float, float] | None:
    """(pace, hr) of the first row whose slope exceeds ``limit``."""
    hits = points[points["slope"] > limit]
    if hits.empty:
        return None
    row = hits.iloc[0]
    return float(row["pace"]), float(row["hr"])


def detect_by_slope(samples: Sequence[SessionSample]) -> ThresholdEstimate | None:
    """Find both thresholds as inflections of the smoothed HR/pace slope.

    The aerobic threshold is the first smoothed point in the slower 60% of
    points whose slope exceeds 1.3x the mean slope; the anaerobic threshold
    is the first point in the faster 40% exceeding 1.8x the mean.

    Returns:
        An estimate, or None if there are fewer than three slope points,
        the mean slope is not positive, or either inflection is missing.
    """
    points = slope_points(samples)
    if len(points) < MIN_SLOPE_POINTS:
        logger.debug("Slope step skipped: %d slope points", len(points))
        return None

    smoothed = smooth_slopes(points)
    avg_slope = float(smoothed["slope"].mean())
    if not math.isfinite(avg_slope) or avg_slope <= 0:
        logger.debug("Slope step skipped: mean slope %.4f", avg_slope)
        return None

    cutoff = int(len(smoothed) * AEROBIC_SEARCH_FRACTION)
    aerobic = _first_above(smoothed.iloc[:cutoff], avg_slope * AEROBIC_SLOPE_MULTIPLIER)
    anaerobic = _first_above(smoothed.iloc[cutoff:], avg_slope * ANAEROBIC_SLOPE_MULTIPLIER)
    if aerobic is None or anaerobic is None:
        return None

    return ThresholdEstimate(
        aerobic_pace_s_per_km=aerobic[0],
        aerobic_hr_bpm=aerobic[1],
        anaerobic_pace_s_per_km=anaerobic[0],
        anaerobic_hr_bpm=anaerobic[1],
        method=DetectionMethod.SLOPE_INFLECTION,
        samples_used=len(samples),
    )


# ---------------------------------------------------------------------------
# Step 2: heart-rate anchors
# ---------------------------------------------------------------------------


def interpolate_pace_at_hr(
    samples: Sequence[SessionSample], target_hr: float
) -> float | None:
    """Pace at a target heart rate by linear interpolation.

    Uses the highest-HR sample at or below the target and the lowest-HR
    sample at or above it. When only one side exists its pace is returned
    unchanged; there is no extrapolation beyond the observed range.
    """
    below: SessionSample | None = None
    above: SessionSample | None = None
    for sample in sort_by_pace(samples):
        if sample.hr_bpm <= target_hr and (below is None or sample.hr_bpm > below.hr_bpm):
            below = sample
        if sample.hr_bpm >= target_hr and (above is None or sample.hr_bpm < above.hr_bpm):
            above = sample

    if below is not None and above is not None and below is not above:
        if above.hr_bpm == below.hr_bpm:
            return below.pace_s_per_km
        ratio = (target_hr - below.hr_bpm) / (above.hr_bpm - below.hr_bpm)
        return below.pace_s_per_km + ratio * (above.pace_s_per_km - below.pace_s_per_km)
    if below is not None:
        return below.pace_s_per_km
    if above is not None:
        return above.pace_s_per_km
    return None


def hr_anchors(
    samples: Sequence[SessionSample],
    anchoring: HrAnchoring = DEFAULT_HR_ANCHORING,
    max_hr_bpm: float | None = None,
) -> tuple[float, float]:
    """Target heart rates (aerobic, anaerobic) for the fallback step.

    Raises:
        InsufficientDataError: If the MAX_HR policy is configured but no
            usable max heart rate is known.
    """
    if anchoring is HrAnchoring.MAX_HR:
        if max_hr_bpm is None or not math.isfinite(max_hr_bpm) or max_hr_bpm <= 0:
            raise InsufficientDataError(
                "Max-HR anchoring needs a known max heart rate",
                sample_count=len(samples),
            )
        return (
            max_hr_bpm * AEROBIC_MAX_HR_FRACTION,
            max_hr_bpm * ANAEROBIC_MAX_HR_FRACTION,
        )

    hrs = np.array([s.hr_bpm for s in samples], dtype=np.float64)
    min_hr = float(hrs.min())
    hr_range = float(hrs.max()) - min_hr
    return (
        min_hr + hr_range * AEROBIC_HR_RANGE_FRACTION,
        min_hr + hr_range * ANAEROBIC_HR_RANGE_FRACTION,
    )


def detect_by_hr_anchors(
    samples: Sequence[SessionSample],
    anchoring: HrAnchoring = DEFAULT_HR_ANCHORING,
    max_hr_bpm: float | None = None,
) -> ThresholdEstimate:
    """Place both thresholds at heart-rate anchors and interpolate paces.

    Raises:
        InsufficientDataError: If either pace cannot be resolved.
    """
    if not samples:
        raise InsufficientDataError("No samples to interpolate", sample_count=0)

    aerobic_hr, anaerobic_hr = hr_anchors(samples, anchoring, max_hr_bpm)
    aerobic_pace = interpolate_pace_at_hr(samples, aerobic_hr)
    anaerobic_pace = interpolate_pace_at_hr(samples, anaerobic_hr)
    if aerobic_pace is None or anaerobic_pace is None:
        raise InsufficientDataError(
            "Could not resolve threshold pace from heart-rate anchors",
            sample_count=len(samples),
        )

    return ThresholdEstimate(
        aerobic_pace_s_per_km=aerobic_pace,
        aerobic_hr_bpm=aerobic_hr,
        anaerobic_pace_s_per_km=anaerobic_pace,
        anaerobic_hr_bpm=anaerobic_hr,
        method=DetectionMethod.HR_PERCENTILE,
        samples_used=len(samples),
    )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def enforce_threshold_order(estimate: ThresholdEstimate) -> ThresholdEstimate:
    """Swap an inverted pair so the anaerobic pace is the faster one.

    Raises:
        DegenerateEstimateError: If any value is non-finite or a pace is
            not positive.
    """
    values = (
        estimate.aerobic_pace_s_per_km,
        estimate.aerobic_hr_bpm,
        estimate.anaerobic_pace_s_per_km,
        estimate.anaerobic_hr_bpm,
    )
    if not all(math.isfinite(v) for v in values):
        raise DegenerateEstimateError(f"Non-finite threshold estimate: {values}")
    if estimate.anaerobic_pace_s_per_km <= 0 or estimate.aerobic_pace_s_per_km <= 0:
        raise DegenerateEstimateError(f"Non-positive threshold pace: {values}")

    if estimate.anaerobic_pace_s_per_km > estimate.aerobic_pace_s_per_km:
        logger.info(
            "Inverted thresholds (LT1 %.1f s/km, LT2 %.1f s/km), swapping",
            estimate.aerobic_pace_s_per_km,
            estimate.anaerobic_pace_s_per_km,
        )
        estimate = dataclasses.replace(
            estimate,
            aerobic_pace_s_per_km=estimate.anaerobic_pace_s_per_km,
            aerobic_hr_bpm=estimate.anaerobic_hr_bpm,
            anaerobic_pace_s_per_km=estimate.aerobic_pace_s_per_km,
            anaerobic_hr_bpm=estimate.aerobic_hr_bpm,
        )
    return estimate


def detect_thresholds(
    samples: Sequence[SessionSample],
    prior_max_hr_bpm: float | None = None,
    anchoring: HrAnchoring = DEFAULT_HR_ANCHORING,
) -> ThresholdEstimate:
    """Estimate aerobic and anaerobic thresholds from filtered samples.

    Args:
        samples: Quality-filtered samples (see ``filter_sessions``).
        prior_max_hr_bpm: Known max heart rate; only read under the
            MAX_HR anchoring policy.
        anchoring: Deployment-wide heart-rate anchoring policy.

    Returns:
        A ThresholdEstimate with anaerobic pace <= aerobic pace.

    Raises:
        InsufficientDataError: If there are no samples or a pace cannot be
            resolved.
        DegenerateEstimateError: If the samples cannot produce a usable
            pair (non-finite values, or every sample at the same pace).
    """
    if not samples:
        raise InsufficientDataError("No samples to detect thresholds from", sample_count=0)
    for sample in samples:
        if not (math.isfinite(sample.pace_s_per_km) and math.isfinite(sample.hr_bpm)):
            raise DegenerateEstimateError(f"Non-finite sample: {sample}")
    if len({s.pace_s_per_km for s in samples}) == 1:
        raise DegenerateEstimateError(
            "All samples share one pace; no pace/HR relationship to fit",
        )

    estimate = detect_by_slope(samples)
    if estimate is None:
        estimate = detect_by_hr_anchors(samples, anchoring, prior_max_hr_bpm)

    estimate = enforce_threshold_order(estimate)
    logger.info(
        "Thresholds via %s from %d samples: LT1 %.1f s/km @ %.0f bpm, LT2 %.1f s/km @ %.0f bpm",
        estimate.method.name,
        len(samples),
        estimate.aerobic_pace_s_per_km,
        estimate.aerobic_hr_bpm,
        estimate.anaerobic_pace_s_per_km,
        estimate.anaerobic_hr_bpm,
    )
    return estimate
