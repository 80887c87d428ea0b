"""Key/value persistence for front-end state (history list, theme flag).

Everything lives in one JSON object on disk. A missing or unreadable file
reads as empty; values the calculator can't make sense of are ignored.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from scicalc.session import HistoryEntry

logger = logging.getLogger(__name__)

STORAGE_ENV_VAR = "SCICALC_STORAGE"
DEFAULT_STORAGE_PATH = Path.home() / ".scicalc.json"

HISTORY_KEY = "calc_history_v1"
THEME_KEY = "calc_theme_v1"
THEMES = ("dark", "light")


def storage_path() -> Path:
    return Path(os.environ.get(STORAGE_ENV_VAR, DEFAULT_STORAGE_PATH))


class Storage:
    def __init__(self, path: Optional[Path] = None):
        self.path = path if path is not None else storage_path()

    def load_all(self) -> dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.debug("Starting with empty storage, could not read %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", self.path)
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self.load_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self.load_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)

    def load_history(self) -> list[HistoryEntry]:
        raw = self.get(HISTORY_KEY, [])
        if not isinstance(raw, list):
            return []
        try:
            return [HistoryEntry.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding malformed history in %s: %s", self.path, e)
            return []

    def save_history(self, history: list[HistoryEntry]) -> None:
        self.set(HISTORY_KEY, [entry.to_dict() for entry in history])

    def load_theme(self) -> Optional[str]:
        theme = self.get(THEME_KEY)
        return theme if theme in THEMES else None

    def save_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme {theme!r}, expected one of {THEMES}")
        self.set(THEME_KEY, theme)
