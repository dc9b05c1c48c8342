"""Application configuration: QSettings-backed preferences and index roots."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QObject, Signal, Slot, QSettings

logger = logging.getLogger(__name__)

# Default values
DEFAULTS = {
    "paths/claudeDir": "~/.claude",
    "history/maxEntries": 200,
    "search/maxResults": 100,
    "usage/monthlyTokenLimit": 5_000_000,
    "advanced/debugLogging": False,
}


@dataclass(frozen=True)
class IndexConfig:
    """Filesystem roots and payload limits for one engine instance."""

    claude_dir: Path
    history_limit: int = DEFAULTS["history/maxEntries"]
    search_limit: int = DEFAULTS["search/maxResults"]
    monthly_token_limit: int = DEFAULTS["usage/monthlyTokenLimit"]

    @property
    def history_file(self) -> Path:
        return self.claude_dir / "history.jsonl"

    @property
    def projects_dir(self) -> Path:
        return self.claude_dir / "projects"

    @classmethod
    def from_home(cls, home: str | Path, **limits) -> "IndexConfig":
        return cls(claude_dir=Path(home) / ".claude", **limits)

    @classmethod
    def from_settings(cls, settings: "ConfigManager") -> "IndexConfig":
        claude_dir = os.path.expanduser(settings.get_string("paths/claudeDir"))
        return cls(
            claude_dir=Path(claude_dir),
            history_limit=settings.get_int("history/maxEntries"),
            search_limit=settings.get_int("search/maxResults"),
            monthly_token_limit=settings.get_int("usage/monthlyTokenLimit"),
        )


class ConfigManager(QObject):
    """Centralized application settings."""

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
            logger.warning("Invalid integer for %s: %r", key, val)
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

    @Slot(str)
    def reset(self, key: str):
        """Drop a stored value so the default applies again."""
        self._settings.remove(key)
        self.settings_changed.emit(key)

    def index_config(self) -> IndexConfig:
        return IndexConfig.from_settings(self)
