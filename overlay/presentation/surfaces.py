from __future__ import annotations

import sys
from collections import deque
from typing import Deque, Optional, Protocol, TextIO

from overlay.core.models import DiagnosticsMenu, ToolView


class PresentationSurface(Protocol):
    def show_menu(self, menu: DiagnosticsMenu) -> None: ...

    def show_tool(self, view: ToolView) -> None: ...


class TerminalSurface:
    """Plain-text rendering for the CLI."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream if stream is not None else sys.stdout

    def _write(self, line: str = "") -> None:
        print(line, file=self._stream)

    def show_menu(self, menu: DiagnosticsMenu) -> None:
        if menu.is_empty:
            self._write("No diagnostic tools available.")
            return
        for p in menu.providers:
            self._write(f"{p.service_name} ({p.provider_id})")
            for t in p.tools:
                self._write(f"  - {t.display_name} [{t.tool_id}]")

    def show_tool(self, view: ToolView) -> None:
        self._write(view.title)
        self._write("=" * len(view.title))
        for section in view.sections:
            self._write()
            self._write(f"{section.title}:")
            if not section.rows:
                self._write("  (none)")
            for row in section.rows:
                self._write(f"  {row.key}: {row.value}" if row.value is not None else f"  {row.key}")


class RecordingSurface:
    """Keeps the most recent menus and tool views shown on it (the console reads the last menu back)."""

    def __init__(self, maxlen: Optional[int] = 1) -> None:
        self.menus: Deque[DiagnosticsMenu] = deque(maxlen=maxlen)
        self.tools: Deque[ToolView] = deque(maxlen=maxlen)

    def show_menu(self, menu: DiagnosticsMenu) -> None:
        self.menus.append(menu)

    def show_tool(self, view: ToolView) -> None:
        self.tools.append(view)

    @property
    def last_menu(self) -> DiagnosticsMenu | None:
        return self.menus[-1] if self.menus else None
