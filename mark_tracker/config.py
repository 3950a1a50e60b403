"""Configuration: environment variables and data file locations."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _bool_env(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# Environment variables with defaults
# ---------------------------------------------------------------------------

SERVICE_ID = os.getenv("SERVICE_ID", "mark_tracker")
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

# Catalog data files
PACKAGE_DATA_DIR = Path(__file__).resolve().parent / "data"
DATA_DIR = Path(os.getenv("MARK_TRACKER_DATA_DIR", str(PACKAGE_DATA_DIR)))

QUESTS_FILE = os.getenv("QUESTS_FILE", "mark_quests.yml")
QUEST_TYPES_FILE = os.getenv("QUEST_TYPES_FILE", "quest_types.yml")
DUNGEONS_FILE = os.getenv("DUNGEONS_FILE", "dungeons.yml")

# Display filters
HIDE_SCOUT_QUESTS = _bool_env("HIDE_SCOUT_QUESTS", True)
SCOUT_QUEST_TYPE = os.getenv("SCOUT_QUEST_TYPE", "Scout")

# Caller-side easter egg
SECRET_QUERY = "mrunibro"
SECRET_NOTICE = (
    "You expected an easter egg, but it was me, BEEO!\n\n"
    "Hopefully you'll find some use out of this tool."
)
