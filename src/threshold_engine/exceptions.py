"""Exception hierarchy for the threshold engine.

None of these are fatal: callers report "not enough data yet" or reject a
single rating and leave the stored profile untouched.
"""

from __future__ import annotations


class ThresholdEngineError(Exception):
    """Base exception for all threshold_engine errors."""


class InsufficientDataError(ThresholdEngineError):
    """Too few qualifying sessions, or a threshold pace could not be resolved."""

    def __init__(self, message: str, sample_count: int | None = None) -> None:
        super().__init__(message)
        self.sample_count = sample_count


class DegenerateEstimateError(InsufficientDataError):
    """The samples produce an inverted or non-finite threshold pair."""


class InvalidRatingError(ThresholdEngineError):
    """An effort rating outside 1-10 or for a session the engine never saw."""
