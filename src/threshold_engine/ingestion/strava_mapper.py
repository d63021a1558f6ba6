"""Pure functions mapping activity-platform JSON dicts to RawSession records.

No I/O — takes the activity dicts a Strava client returns (summary or
detailed activity representation) and builds RawSession values. Missing or
malformed fields become None (or 0 for speed/duration) so the sample filter
can reject them.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from threshold_engine.models.session import RawSession


def map_activity(raw: dict[str, Any]) -> RawSession:
    """Map one activity dict to a RawSession."""
    return RawSession(
        activity_kind=_extract_kind(raw),
        average_speed_m_per_s=_to_float(raw.get("average_speed")) or 0.0,
        duration_s=_to_int(raw.get("moving_time")) or _to_int(raw.get("elapsed_time")) or 0,
        average_hr_bpm=_positive(_to_float(raw.get("average_heartrate"))),
        effort_score=_to_float(raw.get("suffer_score")),
        start_time=_parse_start(raw.get("start_date")),
        session_id=str(raw["id"]) if raw.get("id") is not None else None,
        name=str(raw.get("name") or ""),
        distance_m=_to_float(raw.get("distance")),
        max_hr_bpm=_positive(_to_float(raw.get("max_heartrate"))),
    )


def map_activities(raw_list: Iterable[Any]) -> list[RawSession]:
    """Map a list of activity dicts, skipping entries that are not dicts."""
    return [map_activity(raw) for raw in raw_list if isinstance(raw, dict)]


# ---------------------------------------------------------------------------
# Internal extractors — each handles None input gracefully
# ---------------------------------------------------------------------------


def _extract_kind(raw: dict[str, Any]) -> str:
    """Activity kind, preferring the legacy ``type`` over ``sport_type``."""
    kind = raw.get("type") or raw.get("sport_type")
    return str(kind) if kind else ""


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        result = float(value)
    except (ValueError, TypeError):
        return None
    return result if math.isfinite(result) else None


def _to_int(value: Any) -> Optional[int]:
    as_float = _to_float(value)
    return int(as_float) if as_float is not None else None


def _positive(value: Optional[float]) -> Optional[float]:
    """Platforms report 0 for 'no sensor'; treat it as missing."""
    if value is None or value <= 0:
        return None
    return value


def _parse_start(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp such as '2025-01-15T07:30:00Z'.

    A timestamp without an offset is taken as UTC.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
