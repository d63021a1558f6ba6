"""Recalibration of the anaerobic threshold from perceived effort.

A session run near threshold pace should feel like roughly 7/10. If it
felt clearly easier the athlete is fitter than estimated and the threshold
pace is tightened; if it felt clearly harder it is loosened. The nudge is a
small, cheap correction between full re-detections, which replace it.

Reference:
    Foster et al. (2001). A new approach to monitoring exercise training.
    J Strength Cond Res 15(1):109-115.
"""

from __future__ import annotations

import dataclasses
import logging

from threshold_engine.config import EngineConfig
from threshold_engine.exceptions import InvalidRatingError
from threshold_engine.math.zones import derive_zones
from threshold_engine.models.athlete_profile import AthleteProfile
from threshold_engine.models.enums import RPE_EASY_CEILING, RPE_HARD_FLOOR, RPE_MAX, RPE_MIN
from threshold_engine.models.session import SessionSample

logger = logging.getLogger(__name__)


def validate_rating(rating: int) -> int:
    """Return the rating if it is an integer in 1-10.

    Raises:
        InvalidRatingError: Otherwise.
    """
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRatingError(f"Rating must be an integer, got {rating!r}")
    if not RPE_MIN <= rating <= RPE_MAX:
        raise InvalidRatingError(f"Rating must be {RPE_MIN}-{RPE_MAX}, got {rating}")
    return rating


def is_threshold_effort(
    pace_s_per_km: float, threshold_pace_s_per_km: float, band: float
) -> bool:
    """True if a pace is within ``band`` (fraction) of the threshold pace."""
    return abs(pace_s_per_km - threshold_pace_s_per_km) <= threshold_pace_s_per_km * band


def pace_adjustment(rating: int, step_s: float) -> float:
    """Change to apply to the anaerobic-threshold pace for a rating (s/km).

    Negative tightens (faster threshold), positive loosens.
    """
    if rating <= RPE_EASY_CEILING:
        return -step_s
    if rating >= RPE_HARD_FLOOR:
        return step_s
    return 0.0


def apply_rating(
    profile: AthleteProfile,
    sample: SessionSample,
    rating: int,
    config: EngineConfig | None = None,
) -> AthleteProfile:
    """Nudge the anaerobic threshold using one effort rating.

    The rating only counts when the athlete has thresholds and the session
    pace is within the threshold band; otherwise the same profile object is
    returned. A counted rating always increments ``ratings_since_recalc``.
    A nudge never moves the anaerobic pace past the aerobic pace.

    Args:
        profile: Current profile.
        sample: The rated session.
        rating: Perceived effort, 1-10.
        config: Engine configuration. Defaults to ``EngineConfig()``.

    Returns:
        A new profile with zones re-derived if the threshold moved.

    Raises:
        InvalidRatingError: If the rating is not an integer in 1-10.
    """
    config = config or EngineConfig()
    validate_rating(rating)

    if not profile.has_thresholds:
        logger.debug("Rating ignored: athlete %s has no thresholds", profile.athlete_id)
        return profile
    thresholds = profile.thresholds

    anaerobic = thresholds.anaerobic_pace_s_per_km
    if not is_threshold_effort(sample.pace_s_per_km, anaerobic, config.threshold_pace_band):
        logger.debug(
            "Rating ignored: %.1f s/km is not within %.0f%% of threshold %.1f s/km",
            sample.pace_s_per_km,
            config.threshold_pace_band * 100,
            anaerobic,
        )
        return profile

    counted = dataclasses.replace(
        profile, ratings_since_recalc=profile.ratings_since_recalc + 1
    )
    delta = pace_adjustment(rating, config.recalibration_step_s)
    if delta == 0.0:
        return counted

    new_pace = min(anaerobic + delta, thresholds.aerobic_pace_s_per_km)
    if new_pace <= 0:
        return counted

    logger.info(
        "RPE %d at threshold pace: LT2 %.1f -> %.1f s/km for athlete %s",
        rating,
        anaerobic,
        new_pace,
        profile.athlete_id,
    )
    return dataclasses.replace(
        counted,
        thresholds=dataclasses.replace(thresholds, anaerobic_pace_s_per_km=new_pace),
        zones=derive_zones(new_pace),
    )


def needs_redetection(profile: AthleteProfile, config: EngineConfig | None = None) -> bool:
    """True once the applied-rating count has reached the re-detection cadence.

    A successful re-detection resets the count to 0, so a count above the
    cadence means the last attempt lacked data; every further counted
    rating retries until one succeeds.
    """
    config = config or EngineConfig()
    return profile.ratings_since_recalc >= config.ratings_per_redetection
