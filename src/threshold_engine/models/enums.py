"""Enumerations and tunable constants for the threshold engine.

Every heuristic the engine relies on lives here as a named constant so it
can be reviewed and tuned in one place. Where a value comes from the
literature the source is cited; the rest are empirical defaults.
"""

from enum import Enum, IntEnum, auto


class ZoneType(IntEnum):
    """Pace zones anchored on critical pace, slowest (1) to fastest (5)."""

    ZONE_1 = 1
    ZONE_2 = 2
    ZONE_3 = 3
    ZONE_4 = 4
    ZONE_5 = 5


class DetectionMethod(IntEnum):
    """Which detection step produced a ThresholdEstimate."""

    SLOPE_INFLECTION = auto()
    HR_PERCENTILE = auto()


class HrAnchoring(str, Enum):
    """Heart-rate anchoring policy for the fallback detection step.

    OBSERVED_RANGE places the thresholds at fixed fractions of the heart-rate
    range seen in the samples. MAX_HR places them at fixed fractions of a
    known maximum heart rate. A deployment picks one; it is never mixed
    per call.
    """

    OBSERVED_RANGE = "observed_range"
    MAX_HR = "max_hr"


class OutcomeStatus(IntEnum):
    """Result of a profile-mutating operation, as reported to callers."""

    UPDATED = auto()
    UNCHANGED = auto()
    INSUFFICIENT_DATA = auto()
    INVALID_RATING = auto()


ZONE_NAMES = {
    ZoneType.ZONE_1: "Recovery",
    ZoneType.ZONE_2: "Aerobic Base",
    ZoneType.ZONE_3: "Tempo",
    ZoneType.ZONE_4: "Threshold",
    ZoneType.ZONE_5: "Max Effort",
}

# ---------------------------------------------------------------------------
# Sample filter
# ---------------------------------------------------------------------------
# Activity kinds whose pace/HR relationship is comparable
RUN_ACTIVITY_KINDS = frozenset({"Run", "TrailRun", "VirtualRun"})

# Sessions must last strictly longer than this to reach a steady HR
MIN_SESSION_DURATION_S = 900

# Effort scores at or above this are treated as races / maximal efforts
MAX_EFFORT_SCORE = 250.0

# Fraction of samples trimmed from each end after sorting by HR
OUTLIER_TRIM_FRACTION = 0.10

# Minimum qualifying sessions (counted before the outlier trim)
MIN_QUALIFYING_SESSIONS = 5

# History window considered for an estimate
DEFAULT_LOOKBACK_DAYS = 90

# ---------------------------------------------------------------------------
# Threshold detection — slope-inflection step
# ---------------------------------------------------------------------------
# Minimum HR/pace slope points before the inflection search is attempted
MIN_SLOPE_POINTS = 3

# Moving-average window used to smooth the slope sequence
SLOPE_SMOOTHING_WINDOW = 3

# Share of the smoothed points (slow end) searched for the aerobic threshold
AEROBIC_SEARCH_FRACTION = 0.60

# Slope multiples over the mean smoothed slope that mark an inflection
AEROBIC_SLOPE_MULTIPLIER = 1.3
ANAEROBIC_SLOPE_MULTIPLIER = 1.8

# ---------------------------------------------------------------------------
# Threshold detection — heart-rate fallback step
# ---------------------------------------------------------------------------
# Fractions of the observed HR range — Seiler (2010), Esteve-Lanao et al. (2005)
AEROBIC_HR_RANGE_FRACTION = 0.62
ANAEROBIC_HR_RANGE_FRACTION = 0.84

# Fractions of max HR — Seiler (2010) three-zone model boundaries
AEROBIC_MAX_HR_FRACTION = 0.78
ANAEROBIC_MAX_HR_FRACTION = 0.89

DEFAULT_HR_ANCHORING = HrAnchoring.OBSERVED_RANGE

# ---------------------------------------------------------------------------
# Zone multipliers of critical pace (s/km) — slower zones have larger values
# Skiba (2008) / Magness (2014) style bands around critical speed
# ---------------------------------------------------------------------------
ZONE_1_FLOOR_MULTIPLIER = 1.35
ZONE_2_FLOOR_MULTIPLIER = 1.20
ZONE_3_FLOOR_MULTIPLIER = 1.08
ZONE_4_FLOOR_MULTIPLIER = 0.97

# (faster bound, slower bound) per zone; None marks an open end
ZONE_PACE_MULTIPLIERS = {
    ZoneType.ZONE_1: (ZONE_1_FLOOR_MULTIPLIER, None),
    ZoneType.ZONE_2: (ZONE_2_FLOOR_MULTIPLIER, ZONE_1_FLOOR_MULTIPLIER),
    ZoneType.ZONE_3: (ZONE_3_FLOOR_MULTIPLIER, ZONE_2_FLOOR_MULTIPLIER),
    ZoneType.ZONE_4: (ZONE_4_FLOOR_MULTIPLIER, ZONE_3_FLOOR_MULTIPLIER),
    ZoneType.ZONE_5: (None, ZONE_4_FLOOR_MULTIPLIER),
}

# ---------------------------------------------------------------------------
# Recalibration from perceived effort (RPE, Borg CR-10 style 1-10 scale)
# ---------------------------------------------------------------------------
RPE_MIN = 1
RPE_MAX = 10

# RPE at or below this means threshold pace felt easy -> tighten
RPE_EASY_CEILING = 5

# RPE at or above this means threshold pace felt too hard -> loosen
RPE_HARD_FLOOR = 9

# A session counts as threshold work within this fraction of threshold pace
THRESHOLD_PACE_BAND = 0.10

# Size of a single nudge to the anaerobic-threshold pace (s/km)
RECALIBRATION_STEP_S_PER_KM = 5.0

# Full re-detection after this many applied ratings
RATINGS_PER_REDETECTION = 3
