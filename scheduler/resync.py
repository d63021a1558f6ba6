"""Scheduled re-sync — re-estimates every known athlete's thresholds.

Profiles are read from and written back to one JSON file per athlete in
PROFILE_DIR; history comes from one JSON list of activity dicts per athlete
in HISTORY_DIR (as written by the activity-sync job).

Usage:
    python -m scheduler.resync --once      # single run (for cron)
    python -m scheduler.resync --daemon    # APScheduler loop
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Callable, Sequence

from threshold_engine.arena import ProfileArena
from threshold_engine.config import EngineConfig
from threshold_engine.engine import ThresholdEngine
from threshold_engine.ingestion import map_activities
from threshold_engine.models.enums import OutcomeStatus
from threshold_engine.models.session import RawSession

from scheduler.config import HISTORY_DIR, PROFILE_DIR, RESYNC_HOUR, RESYNC_MINUTE

logger = logging.getLogger(__name__)

HistoryProvider = Callable[[str], Sequence[RawSession]]


def load_profiles(arena: ProfileArena, profile_dir: Path) -> int:
    """Load every ``<athlete_id>.json`` profile into the arena.

    A file that cannot be read or parsed is logged and skipped.

    Returns:
        Number of profiles loaded.
    """
    if not profile_dir.is_dir():
        logger.warning("Profile directory %s does not exist", profile_dir)
        return 0
    loaded = 0
    for path in sorted(profile_dir.glob("*.json")):
        try:
            with open(path) as f:
                record = json.load(f)
            if not isinstance(record, dict):
                raise ValueError("profile file does not hold a JSON object")
            arena.load([record])
        except (OSError, ValueError, KeyError) as exc:
            logger.error("Skipping unreadable profile %s: %s", path, exc)
            continue
        loaded += 1
    return loaded


def save_profiles(arena: ProfileArena, profile_dir: Path) -> None:
    """Write every arena profile to ``<athlete_id>.json``."""
    profile_dir.mkdir(parents=True, exist_ok=True)
    for record in arena.dump():
        with open(profile_dir / f"{record['athlete_id']}.json", "w") as f:
            json.dump(record, f, indent=2)


def file_history_provider(history_dir: Path) -> HistoryProvider:
    """History provider reading ``<athlete_id>.json`` activity lists.

    A missing or unreadable file counts as an empty history.
    """

    def provide(athlete_id: str) -> Sequence[RawSession]:
        path = history_dir / f"{athlete_id}.json"
        try:
            with open(path) as f:
                return map_activities(json.load(f))
        except FileNotFoundError:
            logger.warning("No activity history at %s", path)
            return []
        except (OSError, ValueError, TypeError) as exc:
            logger.error("Unreadable activity history %s: %s", path, exc)
            return []

    return provide


def resync_all(
    arena: ProfileArena, history_provider: HistoryProvider
) -> dict[str, OutcomeStatus]:
    """Re-run the full estimate for every athlete in the arena.

    One athlete's failure never stops the others.
    """
    results: dict[str, OutcomeStatus] = {}
    for athlete_id in arena.athlete_ids():
        outcome = arena.estimate(athlete_id, history_provider(athlete_id))
        results[athlete_id] = outcome.status
        if outcome.status is OutcomeStatus.UPDATED:
            thresholds = outcome.profile.thresholds
            logger.info(
                "Athlete %s: critical pace %.1f s/km (%s)",
                athlete_id,
                thresholds.anaerobic_pace_s_per_km,  # type: ignore[union-attr]
                thresholds.method.name,  # type: ignore[union-attr]
            )
        else:
            logger.info("Athlete %s: %s", athlete_id, outcome.message)
    return results


def resync_job() -> None:
    """Execute one re-sync cycle over the profile directory."""
    logger.info("Starting re-sync job")
    arena = ProfileArena(ThresholdEngine(EngineConfig.from_env()))
    count = load_profiles(arena, PROFILE_DIR)
    if count == 0:
        logger.info("No profiles to re-sync")
        return

    results = resync_all(arena, file_history_provider(HISTORY_DIR))
    save_profiles(arena, PROFILE_DIR)
    updated = sum(1 for status in results.values() if status is OutcomeStatus.UPDATED)
    logger.info("Re-sync complete: %d of %d profiles updated", updated, len(results))


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = argparse.ArgumentParser(description="Threshold re-sync scheduler")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    args = parser.parse_args()

    if args.once:
        resync_job()
    else:
        from apscheduler.schedulers.blocking import BlockingScheduler

        scheduler = BlockingScheduler()
        scheduler.add_job(
            resync_job,
            "cron",
            hour=RESYNC_HOUR,
            minute=RESYNC_MINUTE,
            id="resync_job",
        )
        logger.info(
            "Scheduler started — re-sync job at %02d:%02d",
            RESYNC_HOUR,
            RESYNC_MINUTE,
        )
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()
