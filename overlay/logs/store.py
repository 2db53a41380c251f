"""Log file listing / reading / deletion for the log viewer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from overlay.core.errors import LogFileNotFoundError
from overlay.core.models import LogFile

logger = logging.getLogger(__name__)

_BYTE_UNITS = ["KB", "MB", "GB", "TB"]


def format_byte_count(n: int) -> str:
    """Human-readable file size using decimal (1000-based) units, e.g. `1.5 KB`."""
    if n < 1000:
        return "1 byte" if n == 1 else f"{n} bytes"
    tenths = 0
    unit = _BYTE_UNITS[0]
    for i, unit in enumerate(_BYTE_UNITS, start=1):
        div = 1000**i
        # Round (half up, in tenths) before picking the unit: 999_999 is "1 MB", not "1000 KB".
        tenths = (n * 10 + div // 2) // div
        if tenths < 10000:
            break
    whole, frac = divmod(tenths, 10)
    return f"{whole} {unit}" if frac == 0 else f"{whole}.{frac} {unit}"


def _creation_time(st: os.stat_result) -> datetime:
    # st_birthtime is only available on some platforms (macOS/BSD); mtime otherwise.
    ts = getattr(st, "st_birthtime", None) or st.st_mtime
    return datetime.fromtimestamp(ts, tz=timezone.utc)


@dataclass
class LogFileStore:
    """Filesystem-backed view of the session log directory."""

    directory: str = "./logs"

    def __post_init__(self) -> None:
        self.directory = os.path.abspath(self.directory)

    def _path(self, name: str) -> Path:
        base = Path(self.directory)
        path = (base / name).resolve()
        # Names must stay inside the log directory.
        if path.parent != base.resolve() or not path.is_file():
            raise LogFileNotFoundError(name)
        return path

    def list_files(self) -> List[LogFile]:
        """Return log files, newest first. Missing directory -> empty list."""
        base = Path(self.directory)
        if not base.is_dir():
            return []
        out: List[LogFile] = []
        for entry in base.iterdir():
            try:
                if not entry.is_file():
                    continue
                st = entry.stat()
            except OSError as e:
                logger.debug("Skipping unreadable log file %s: %s", entry, e)
                continue
            out.append(
                LogFile(
                    name=entry.name,
                    path=str(entry),
                    created_at=_creation_time(st),
                    size_bytes=int(st.st_size),
                )
            )
        out.sort(key=lambda f: (f.created_at, f.name), reverse=True)
        return out

    def get(self, name: str) -> LogFile:
        for f in self.list_files():
            if f.name == name:
                return f
        raise LogFileNotFoundError(name)

    def read(self, name: str) -> str:
        return self._path(name).read_text(encoding="utf-8", errors="replace")

    def delete(self, name: str) -> None:
        self._path(name).unlink()
        logger.info("Deleted log file %s", name)

    def delete_all(self) -> int:
        """
        Best-effort removal of every log file.

        Returns the number of files removed; failures are logged and do not abort the sweep.
        """
        removed = 0
        for f in self.list_files():
            try:
                Path(f.path).unlink()
                removed += 1
            except OSError as e:
                logger.warning("Failed to delete log file %s: %s", f.name, e)
        logger.info("Deleted %d log file(s) from %s", removed, self.directory)
        return removed

