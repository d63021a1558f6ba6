"""Pace conversions and M:SS formatting."""

from __future__ import annotations

import math


def speed_to_pace_s_per_km(speed_m_per_s: float) -> float:
    """Convert a speed in m/s to pace in seconds per km.

    Raises:
        ValueError: If the speed is not finite and positive.
    """
    if not math.isfinite(speed_m_per_s) or speed_m_per_s <= 0:
        raise ValueError(f"Speed must be finite and positive, got {speed_m_per_s}")
    return 1000.0 / speed_m_per_s


def format_pace(s_per_km: float) -> str:
    """Format seconds per km as 'M:SS'. e.g. 305.0 -> '5:05'."""
    if not math.isfinite(s_per_km) or s_per_km <= 0:
        return "--"
    total = int(round(s_per_km))
    return f"{total // 60}:{total % 60:02d}"


def format_pace_range(faster: float | None, slower: float | None) -> str:
    """Format a pace band. Open ends read as 'faster than' / 'slower than'."""
    if faster is None and slower is None:
        return "--"
    if faster is None:
        return f"faster than {format_pace(slower)}"  # type: ignore[arg-type]
    if slower is None:
        return f"slower than {format_pace(faster)}"
    return f"{format_pace(faster)}-{format_pace(slower)}"
