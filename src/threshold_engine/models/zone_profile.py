"""Pace zones derived from critical pace."""

from __future__ import annotations

from dataclasses import dataclass, field

from threshold_engine.models.enums import ZONE_NAMES, ZoneType


@dataclass(frozen=True)
class PaceZone:
    """A single pace band in seconds per km.

    ``lower`` is the faster bound (smaller s/km) and ``upper`` the slower
    one. Zone 1 has no slower bound and zone 5 no faster bound.
    """

    zone: ZoneType
    lower: float | None
    upper: float | None

    @property
    def name(self) -> str:
        return ZONE_NAMES[self.zone]

    def contains(self, pace_s_per_km: float) -> bool:
        """True if the pace lies in this band (slower bound exclusive)."""
        if self.lower is not None and pace_s_per_km < self.lower:
            return False
        if self.upper is not None and pace_s_per_km >= self.upper:
            return False
        return True


@dataclass(frozen=True)
class ZoneProfile:
    """Five contiguous pace zones, fully determined by critical pace."""

    critical_pace_s_per_km: float
    zones: tuple[PaceZone, ...] = field(default_factory=tuple)

    def get(self, zone: ZoneType) -> PaceZone:
        """Return the band for a zone."""
        for pace_zone in self.zones:
            if pace_zone.zone == zone:
                return pace_zone
        raise KeyError(f"Zone {zone!r} not in profile")
