"""ThresholdEngine — composes filtering, detection, zones and recalibration."""

from __future__ import annotations

import dataclasses
import logging
import math
from datetime import datetime
from typing import Iterable, Sequence

from threshold_engine.config import EngineConfig
from threshold_engine.exceptions import InsufficientDataError, InvalidRatingError
from threshold_engine.math.pace import speed_to_pace_s_per_km
from threshold_engine.math.recalibration import apply_rating, needs_redetection
from threshold_engine.math.sample_filter import filter_sessions
from threshold_engine.math.threshold_detection import detect_thresholds
from threshold_engine.math.zones import derive_zones
from threshold_engine.models.athlete_profile import AthleteProfile
from threshold_engine.models.session import EffortRating, RawSession, SessionSample

logger = logging.getLogger(__name__)


def find_session(history: Iterable[RawSession], session_id: str) -> RawSession:
    """Look up a session by its platform identifier.

    Raises:
        InvalidRatingError: If no session in the history has that id.
    """
    for session in history:
        if session.session_id is not None and str(session.session_id) == str(session_id):
            return session
    raise InvalidRatingError(f"Unknown session {session_id!r}")


def rated_sample(session: RawSession) -> SessionSample:
    """Build the sample a rating refers to.

    Raises:
        InvalidRatingError: If the session has no usable pace or heart rate.
    """
    speed = session.average_speed_m_per_s
    hr = session.average_hr_bpm
    if not math.isfinite(speed) or speed <= 0 or hr is None or not math.isfinite(hr):
        raise InvalidRatingError(
            f"Session {session.session_id!r} has no usable pace and heart rate"
        )
    return SessionSample(
        pace_s_per_km=speed_to_pace_s_per_km(speed),
        hr_bpm=float(hr),
        duration_s=int(session.duration_s),
        effort_score=session.effort_score,
        session_id=session.session_id,
        start_time=session.start_time,
    )


class ThresholdEngine:
    """Estimates thresholds and zones and keeps them calibrated.

    Every method is a pure value transformation: profiles go in, new
    profiles come out. Callers own storage and must serialize mutations per
    athlete (see ``ProfileArena``).

    Usage:
        engine = ThresholdEngine()
        profile = engine.estimate(history)
        profile = engine.rate_session(profile, EffortRating("123", 4), history)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def estimate(
        self,
        history: Sequence[RawSession],
        prior_profile: AthleteProfile | None = None,
        as_of: datetime | None = None,
    ) -> AthleteProfile:
        """Full estimate: filter, detect, derive zones.

        Overwrites the thresholds and zones of ``prior_profile`` (or a new
        empty profile) and resets ``ratings_since_recalc``. Identical input
        history gives an identical profile.

        Raises:
            InsufficientDataError: If there is not enough usable data. The
                prior profile is not modified.
        """
        base = prior_profile or AthleteProfile()
        samples = filter_sessions(history, config=self.config, as_of=as_of)
        thresholds = detect_thresholds(
            samples,
            prior_max_hr_bpm=base.max_hr_bpm,
            anchoring=self.config.hr_anchoring,
        )
        return dataclasses.replace(
            base,
            thresholds=thresholds,
            zones=derive_zones(thresholds.anaerobic_pace_s_per_km),
            ratings_since_recalc=0,
        )

    def apply_rating(
        self, profile: AthleteProfile, sample: SessionSample, rating: int
    ) -> AthleteProfile:
        """Incremental nudge only; see ``recalibration.apply_rating``."""
        return apply_rating(profile, sample, rating, self.config)

    def rate_session(
        self,
        profile: AthleteProfile,
        rating: EffortRating,
        history: Sequence[RawSession],
    ) -> AthleteProfile:
        """Apply one effort rating, re-detecting when the cadence is reached.

        The rated session is looked up in ``history``. When the count of
        applied ratings reaches ``ratings_per_redetection``, one full
        re-detection over ``history`` replaces the nudged estimate and
        resets the count. If that re-detection lacks data, the nudged
        profile is kept with its count, and the next counted rating
        tries again.

        Raises:
            InvalidRatingError: For a rating outside 1-10, an unknown
                session, or a session without pace and heart rate.
        """
        sample = rated_sample(find_session(history, rating.session_id))
        nudged = self.apply_rating(profile, sample, rating.rating)
        if nudged is profile or not needs_redetection(nudged, self.config):
            return nudged

        logger.info(
            "%d ratings since last detection for athlete %s, re-detecting",
            nudged.ratings_since_recalc,
            nudged.athlete_id,
        )
        try:
            return self.estimate(history, nudged)
        except InsufficientDataError as exc:
            logger.warning(
                "Re-detection skipped for athlete %s: %s", nudged.athlete_id, exc
            )
            return nudged
