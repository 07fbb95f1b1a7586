from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

APP_NAME = "pocket-notes"
LOGGER_NAME = "pocket_notes"

APP_HOME = Path(os.environ.get("POCKET_NOTES_HOME") or Path.home() / f".{APP_NAME}")
DATA_DIR = APP_HOME / "data"
LOG_DIR = APP_HOME / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
RECOVERY_DIR = APP_HOME / "recovery"

GROUPS_KEY = "pocketGroups"
NOTES_KEY = "pocketNotes"

GROUP_COLORS = ("#B38BFA", "#FF79F2", "#43E6FC", "#F19576", "#0047FF", "#6691FF")
DEFAULT_COLOR = GROUP_COLORS[0]

# narrower windows show one pane at a time
MOBILE_BREAKPOINT_PX = 768


@dataclass(frozen=True)
class SettingsKeys:
    UI_GEOMETRY: str = "ui/geometry"
    STORAGE_GROUP: str = "storage"
