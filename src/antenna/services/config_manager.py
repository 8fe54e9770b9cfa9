"""Application configuration manager wrapping QSettings."""

import logging
import os
from pathlib import Path

from PySide6.QtCore import QObject, Signal, Slot, QSettings

logger = logging.getLogger(__name__)

OPENCLAW_DIR_ENV = "OPENCLAW_DIR"

# Default values
DEFAULTS = {
    "general/openclawDir": "~/.openclaw",
    "monitor/pollInterval": 5000,
    "monitor/activeWindowMinutes": 30,
    "monitor/maxWorkers": 4,
    "monitor/passDeadline": 30,
    "advanced/debugLogging": False,
}


class ConfigManager(QObject):
    """Centralized settings for the session monitor."""

    settings_changed = Signal(str)  # key

    def __init__(self, parent=None):
        super().__init__(parent)
        self._settings = QSettings()

    @Slot(str, result=str)
    def get_string(self, key: str) -> str:
        return str(self._settings.value(key, DEFAULTS.get(key, "")))

    @Slot(str, result=int)
    def get_int(self, key: str) -> int:
        val = self._settings.value(key, DEFAULTS.get(key, 0))
        try:
            return int(val)
        except (ValueError, TypeError):
            return DEFAULTS.get(key, 0)

    @Slot(str, result=bool)
    def get_bool(self, key: str) -> bool:
        val = self._settings.value(key, DEFAULTS.get(key, False))
        if isinstance(val, bool):
            return val
        if isinstance(val, str):
            return val.lower() in ("true", "1", "yes")
        return bool(val)

    @Slot(str, str)
    def set_string(self, key: str, value: str):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    @Slot(str, int)
    def set_int(self, key: str, value: int):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    @Slot(str, bool)
    def set_bool(self, key: str, value: bool):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    def openclaw_dir(self) -> Path:
        """OpenClaw root: $OPENCLAW_DIR if set, else the saved setting."""
        env_dir = os.environ.get(OPENCLAW_DIR_ENV)
        if env_dir:
            return Path(env_dir).expanduser()
        return Path(self.get_string("general/openclawDir")).expanduser()

    def pass_deadline(self) -> float | None:
        """Per-pass deadline in seconds, or None when disabled."""
        seconds = self.get_int("monitor/passDeadline")
        return float(seconds) if seconds > 0 else None
