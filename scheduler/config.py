"""Environment-variable-based configuration for the re-sync scheduler."""

from __future__ import annotations

import os
from pathlib import Path

RESYNC_HOUR: int = int(os.environ.get("SCHEDULER_HOUR", "3"))
RESYNC_MINUTE: int = int(os.environ.get("SCHEDULER_MINUTE", "0"))
PROFILE_DIR: Path = Path(os.environ.get("ATHLETE_PROFILE_DIR", "data/profiles")).expanduser()
HISTORY_DIR: Path = Path(os.environ.get("ACTIVITY_HISTORY_DIR", "data/activities")).expanduser()
