"""Sample filter — picks usable sessions out of raw history and trims outliers.

Threshold detection only works on steady, submaximal runs with a heart-rate
trace. Short sessions never reach a steady heart rate, and races push the
pace/HR relationship towards the maximum, so both are excluded before the
heart-rate extremes are trimmed to suppress sensor noise.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Iterable

from threshold_engine.config import EngineConfig
from threshold_engine.exceptions import InsufficientDataError
from threshold_engine.math.pace import speed_to_pace_s_per_km
from threshold_engine.models.session import RawSession, SessionSample

logger = logging.getLogger(__name__)


def is_qualifying(session: RawSession, config: EngineConfig) -> bool:
    """Check whether a raw session can become a SessionSample.

    A session qualifies when it is a run-like activity with a finite positive
    average speed, a heart rate, a duration longer than the floor, and an
    effort score (if any) below the race ceiling.
    """
    if session.activity_kind not in config.activity_kinds:
        return False
    speed = session.average_speed_m_per_s
    if not math.isfinite(speed) or speed <= 0:
        return False
    hr = session.average_hr_bpm
    if hr is None or not math.isfinite(hr) or hr <= 0:
        return False
    if session.duration_s <= config.min_duration_s:
        return False
    if session.effort_score is not None and session.effort_score >= config.max_effort_score:
        return False
    return True


def to_sample(session: RawSession) -> SessionSample:
    """Convert a qualifying RawSession into a SessionSample."""
    return SessionSample(
        pace_s_per_km=speed_to_pace_s_per_km(session.average_speed_m_per_s),
        hr_bpm=float(session.average_hr_bpm),  # type: ignore[arg-type]
        duration_s=int(session.duration_s),
        effort_score=session.effort_score,
        session_id=session.session_id,
        start_time=session.start_time,
    )


def as_utc(moment: datetime) -> datetime:
    """Treat a naive datetime as UTC so it compares with aware ones."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def within_lookback(
    sessions: Iterable[RawSession],
    lookback_days: int,
    as_of: datetime | None = None,
) -> list[RawSession]:
    """Keep sessions that started within ``lookback_days`` of ``as_of``.

    ``as_of`` defaults to the newest start time in the history so the result
    depends only on the input. Sessions without a start time are kept.
    Naive timestamps are taken as UTC.
    """
    sessions = list(sessions)
    if as_of is None:
        starts = [as_utc(s.start_time) for s in sessions if s.start_time is not None]
        if not starts:
            return sessions
        as_of = max(starts)
    cutoff = as_utc(as_of) - timedelta(days=lookback_days)
    return [
        s for s in sessions if s.start_time is None or as_utc(s.start_time) >= cutoff
    ]


def trim_outliers(samples: list[SessionSample], trim_fraction: float) -> list[SessionSample]:
    """Drop the lowest and highest ``trim_fraction`` of samples by heart rate.

    At least one sample is removed from each end whenever trimming is
    enabled. The result keeps heart-rate order.
    """
    ordered = sorted(samples, key=lambda s: s.hr_bpm)
    if trim_fraction <= 0:
        return ordered
    trim_count = max(1, math.floor(len(ordered) * trim_fraction))
    return ordered[trim_count : len(ordered) - trim_count]


def filter_sessions(
    raw_sessions: Iterable[RawSession],
    lookback_days: int | None = None,
    config: EngineConfig | None = None,
    as_of: datetime | None = None,
) -> list[SessionSample]:
    """Select usable samples from raw history.

    Args:
        raw_sessions: The athlete's session history, any order.
        lookback_days: History window. Defaults to ``config.lookback_days``.
        config: Engine configuration. Defaults to ``EngineConfig()``.
        as_of: Reference time for the window; see :func:`within_lookback`.

    Returns:
        Trimmed samples sorted by heart rate (lowest first).

    Raises:
        InsufficientDataError: If fewer than ``config.min_samples`` sessions
            qualify, or nothing survives the outlier trim.
    """
    config = config or EngineConfig()
    window = lookback_days if lookback_days is not None else config.lookback_days
    recent = within_lookback(raw_sessions, window, as_of)

    samples = [to_sample(s) for s in recent if is_qualifying(s, config)]
    logger.debug(
        "%d of %d sessions in the last %d days qualify",
        len(samples),
        len(recent),
        window,
    )
    if len(samples) < config.min_samples:
        raise InsufficientDataError(
            f"Need at least {config.min_samples} qualifying sessions, "
            f"got {len(samples)}",
            sample_count=len(samples),
        )

    trimmed = trim_outliers(samples, config.trim_fraction)
    if not trimmed:
        raise InsufficientDataError(
            "No samples left after outlier trim", sample_count=0
        )
    return trimmed
