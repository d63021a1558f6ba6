"""Pace zones anchored on critical pace (the anaerobic-threshold pace).

Each bound is a fixed multiple of critical pace in s/km, so zones carry no
state of their own and can always be re-derived from the threshold.
"""

from __future__ import annotations

import math

from threshold_engine.models.enums import ZONE_PACE_MULTIPLIERS, ZoneType
from threshold_engine.models.zone_profile import PaceZone, ZoneProfile


def derive_zones(critical_pace_s_per_km: float) -> ZoneProfile:
    """Derive the five pace zones from critical pace.

    Zone bounds as multiples of critical pace (cs), slower to faster:
        Z1 (Recovery):     slower than 1.35 cs
        Z2 (Aerobic Base): 1.20 - 1.35 cs
        Z3 (Tempo):        1.08 - 1.20 cs
        Z4 (Threshold):    0.97 - 1.08 cs
        Z5 (Max Effort):   faster than 0.97 cs

    Args:
        critical_pace_s_per_km: Anaerobic-threshold pace in seconds per km.

    Returns:
        ZoneProfile with zones ordered Z1 to Z5.

    Raises:
        ValueError: If the pace is not finite and positive.
    """
    if not math.isfinite(critical_pace_s_per_km) or critical_pace_s_per_km <= 0:
        raise ValueError(
            f"Critical pace must be finite and positive, got {critical_pace_s_per_km}"
        )

    zones: list[PaceZone] = []
    for zone_type, (faster_mult, slower_mult) in ZONE_PACE_MULTIPLIERS.items():
        lower = critical_pace_s_per_km * faster_mult if faster_mult is not None else None
        upper = critical_pace_s_per_km * slower_mult if slower_mult is not None else None
        zones.append(PaceZone(zone=zone_type, lower=lower, upper=upper))
    return ZoneProfile(critical_pace_s_per_km=critical_pace_s_per_km, zones=tuple(zones))


def classify_pace(pace_s_per_km: float, zones: ZoneProfile) -> ZoneType:
    """Return the zone a pace falls into.

    A pace exactly on a boundary belongs to the slower zone.
    """
    for pace_zone in zones.zones:
        if pace_zone.contains(pace_s_per_km):
            return pace_zone.zone
    # Unreachable for a profile from derive_zones; bands cover every pace.
    raise ValueError(f"Pace {pace_s_per_km} not covered by zone profile")
