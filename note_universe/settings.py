from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "note-universe"
ORG_NAME = "note-universe"
LOGGER_NAME = "note_universe"

APP_HOME = Path(os.environ.get("NOTE_UNIVERSE_HOME") or Path.home() / f".{APP_NAME}")
DATA_DIR = APP_HOME / "notes"
LOG_DIR = APP_HOME / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
RECOVERY_DIR = APP_HOME / "recovery"

DEFAULT_COLOR = "#ffffff"
UNTITLED = "Untitled"
# length of the id fragment used to tell apart notes with the same visible name
ID_PREFIX_LEN = 4
EXPORT_FILENAME = f"{APP_NAME}-export.json"
