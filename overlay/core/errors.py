from __future__ import annotations


class OverlayError(Exception):
    """Base class for overlay errors."""


class ToolNotFoundError(OverlayError, LookupError):
    """Requested tool is not registered or is hidden."""

    def __init__(self, tool_id: str) -> None:
        super().__init__(f"Diagnostic tool not found: {tool_id}")
        self.tool_id = tool_id


class LogFileNotFoundError(OverlayError, LookupError):
    """Requested log file does not exist inside the log directory."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Log file not found: {name}")
        self.name = name
