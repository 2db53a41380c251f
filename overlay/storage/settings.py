"""JSON-file key/value settings (the overlay's equivalent of platform user defaults)."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

LOGGING_ENABLED_KEY = "overlay_logging"


@dataclass
class SettingsStore:
    path: str = "./overlay_settings.json"
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.path = os.path.abspath(self.path)

    def _load(self) -> Dict[str, Any]:
        p = Path(self.path)
        if not p.exists():
            return {}
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        p = Path(self.path)
        p.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".settings-", dir=str(p.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, sort_keys=True, indent=2)
            os.replace(tmp, p)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get_bool(self, key: str, default: bool = False) -> bool:
        with self._lock:
            value = self._load().get(key)
        if isinstance(value, bool):
            return value
        return default

    def set_bool(self, key: str, value: bool) -> None:
        with self._lock:
            data = self._load()
            data[key] = bool(value)
            self._write(data)

    @property
    def logging_enabled(self) -> bool:
        return self.get_bool(LOGGING_ENABLED_KEY, False)

    @logging_enabled.setter
    def logging_enabled(self, value: bool) -> None:
        self.set_bool(LOGGING_ENABLED_KEY, value)
