from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QSettings

from note_universe.settings import APP_NAME, DATA_DIR, ORG_NAME
from note_universe.timeline.builder import normalize_sort

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettingsKeys:
    DATA_DIR: str = "data/dir"
    TIMELINE_SORT_KEY: str = "timeline/sort_key"
    TIMELINE_SORT_DIRECTION: str = "timeline/sort_direction"


def open_settings(path: Path | None = None) -> QSettings:
    """INI file at `path` if given, otherwise the platform's native store."""
    if path is not None:
        return QSettings(str(path), QSettings.Format.IniFormat)
    return QSettings(ORG_NAME, APP_NAME)


def get_str(settings: QSettings, key: str, default: str) -> str:
    try:
        val = settings.value(key, default)
        return str(val) if val is not None else default
    except Exception:
        log.debug("Failed to read setting %s", key, exc_info=True)
        return default


def safe_set_setting(settings: QSettings, key: str, value) -> None:
    """Best-effort write; a broken settings store must not break the caller."""
    try:
        settings.setValue(key, value)
    except Exception:
        log.warning("Failed to write setting %s", key, exc_info=True)


class Preferences:
    def __init__(self, settings: QSettings):
        self._settings = settings

    def data_dir(self) -> Path:
        return Path(get_str(self._settings, SettingsKeys.DATA_DIR, str(DATA_DIR)))

    def set_data_dir(self, path: Path) -> None:
        safe_set_setting(self._settings, SettingsKeys.DATA_DIR, str(path))

    def timeline_sort(self) -> tuple[str, str]:
        return normalize_sort(
            get_str(self._settings, SettingsKeys.TIMELINE_SORT_KEY, ""),
            get_str(self._settings, SettingsKeys.TIMELINE_SORT_DIRECTION, ""),
        )

    def set_timeline_sort(self, sort_key: str, sort_direction: str) -> None:
        sort_key, sort_direction = normalize_sort(sort_key, sort_direction)
        safe_set_setting(self._settings, SettingsKeys.TIMELINE_SORT_KEY, sort_key)
        safe_set_setting(self._settings, SettingsKeys.TIMELINE_SORT_DIRECTION, sort_direction)

    def sync(self) -> None:
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            log.warning("Settings not persisted: status=%s file=%s",
                        self._settings.status(), self._settings.fileName())
