"""Per-athlete profile arena with single-writer discipline.

Each athlete id owns one profile slot guarded by its own lock, so a rating
nudge and a full re-detection for the same athlete can never interleave,
while different athletes proceed independently. Engine errors are turned
into outcome values here; the stored profile only changes on success.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Sequence

from threshold_engine.engine import ThresholdEngine
from threshold_engine.exceptions import InsufficientDataError, InvalidRatingError
from threshold_engine.models.athlete_profile import AthleteProfile
from threshold_engine.models.enums import OutcomeStatus
from threshold_engine.models.session import EffortRating, RawSession
from threshold_engine.serialization.profile import profile_from_dict, profile_to_dict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EstimationOutcome:
    """Result of a full estimate for one athlete."""

    status: OutcomeStatus
    profile: AthleteProfile
    message: str = ""


@dataclass(frozen=True)
class RatingOutcome:
    """Result of recording one effort rating."""

    status: OutcomeStatus
    profile: AthleteProfile
    redetected: bool = False
    message: str = ""


class _Slot:
    __slots__ = ("lock", "profile")

    def __init__(self, profile: AthleteProfile) -> None:
        self.lock = threading.Lock()
        self.profile = profile


class ProfileArena:
    """In-memory store of athlete profiles keyed by athlete id."""

    def __init__(self, engine: ThresholdEngine | None = None) -> None:
        self.engine = engine or ThresholdEngine()
        self._slots: dict[str, _Slot] = {}
        self._slots_lock = threading.Lock()

    def _slot(self, athlete_id: str) -> _Slot:
        with self._slots_lock:
            slot = self._slots.get(athlete_id)
            if slot is None:
                slot = _Slot(AthleteProfile(athlete_id=athlete_id))
                self._slots[athlete_id] = slot
            return slot

    def get(self, athlete_id: str) -> AthleteProfile:
        """Current profile, created empty on first contact."""
        return self._slot(athlete_id).profile

    def athlete_ids(self) -> list[str]:
        with self._slots_lock:
            return sorted(self._slots)

    def estimate(
        self, athlete_id: str, history: Sequence[RawSession]
    ) -> EstimationOutcome:
        """Run a full estimate and store the result."""
        slot = self._slot(athlete_id)
        with slot.lock:
            try:
                updated = self.engine.estimate(history, slot.profile)
            except InsufficientDataError as exc:
                logger.info("Not enough data for athlete %s: %s", athlete_id, exc)
                return EstimationOutcome(
                    status=OutcomeStatus.INSUFFICIENT_DATA,
                    profile=slot.profile,
                    message=str(exc),
                )
            slot.profile = updated
            return EstimationOutcome(status=OutcomeStatus.UPDATED, profile=updated)

    def record_rating(
        self,
        athlete_id: str,
        rating: EffortRating,
        history: Sequence[RawSession],
    ) -> RatingOutcome:
        """Apply an effort rating (and any due re-detection) and store it."""
        slot = self._slot(athlete_id)
        with slot.lock:
            before = slot.profile
            try:
                updated = self.engine.rate_session(before, rating, history)
            except InvalidRatingError as exc:
                logger.info("Rejected rating for athlete %s: %s", athlete_id, exc)
                return RatingOutcome(
                    status=OutcomeStatus.INVALID_RATING,
                    profile=before,
                    message=str(exc),
                )
            slot.profile = updated
            # a counted rating always increments; only re-detection resets to 0
            redetected = updated is not before and updated.ratings_since_recalc == 0
            status = OutcomeStatus.UNCHANGED if updated is before else OutcomeStatus.UPDATED
            return RatingOutcome(status=status, profile=updated, redetected=redetected)

    def load(self, records: list[dict[str, Any]]) -> None:
        """Replace stored profiles from serialized ones (see ``profile_to_dict``).

        Each profile is written into the athlete's existing slot under its
        lock, so a rating in flight is never written to a detached slot.
        """
        for record in records:
            profile = profile_from_dict(record)
            slot = self._slot(profile.athlete_id)
            with slot.lock:
                slot.profile = profile

    def dump(self) -> list[dict[str, Any]]:
        """Serialize every stored profile."""
        return [profile_to_dict(self.get(athlete_id)) for athlete_id in self.athlete_ids()]
