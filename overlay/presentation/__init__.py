from overlay.presentation.menu import build_menu, find_tool, render_tool
from overlay.presentation.presenter import DiagnosticsPresenter
from overlay.presentation.surfaces import PresentationSurface, RecordingSurface, TerminalSurface

__all__ = [
    "DiagnosticsPresenter",
    "PresentationSurface",
    "RecordingSurface",
    "TerminalSurface",
    "build_menu",
    "find_tool",
    "render_tool",
]
