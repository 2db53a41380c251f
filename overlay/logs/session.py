from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from overlay.storage.settings import SettingsStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class SessionLog:
    """
    Writes this process's log records to a per-session file in the log directory.

    Only active while the `overlay_logging` setting is on; the files it produces are what the
    log viewer lists.
    """

    def __init__(self, directory: str, settings: SettingsStore, target: Optional[logging.Logger] = None):
        self._directory = Path(directory)
        self._settings = settings
        self._target = target if target is not None else logging.getLogger()
        self._handler: Optional[logging.FileHandler] = None
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self._handler is not None

    @property
    def path(self) -> Optional[str]:
        h = self._handler
        return h.baseFilename if h is not None else None

    def start(self) -> Optional[str]:
        """Attach the file handler if logging is enabled. Returns the log file path."""
        if not self._settings.logging_enabled:
            return None
        with self._lock:
            if self._handler is not None:
                return self._handler.baseFilename
            self._directory.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
            handler = logging.FileHandler(self._directory / f"{stamp}.log", encoding="utf-8")
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self._target.addHandler(handler)
            self._handler = handler
        logger.info("Session logging to %s", handler.baseFilename)
        return handler.baseFilename

    def stop(self) -> None:
        with self._lock:
            handler, self._handler = self._handler, None
        if handler is None:
            return
        self._target.removeHandler(handler)
        handler.close()

    def apply(self, enabled: bool) -> Optional[str]:
        """Persist the logging toggle and start/stop the session file accordingly."""
        self._settings.logging_enabled = enabled
        if enabled:
            return self.start()
        self.stop()
        return None
