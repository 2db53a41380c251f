from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Protocol, Sequence

from overlay.core.config import OverlayConfig
from overlay.core.models import ToolView

if TYPE_CHECKING:
    from overlay.logs.store import LogFileStore
    from overlay.storage.settings import SettingsStore


@dataclass
class ToolContext:
    """Collaborators a tool may use while rendering."""

    config: OverlayConfig
    settings: "SettingsStore"
    log_store: "LogFileStore"
    extra_properties: Dict[str, str] = field(default_factory=dict)


class DiagnosticTool(Protocol):
    """
    A single diagnostic capability exposed to the end user.

    `tool_id` is the stable identity used by hide-lists; two tools with the same id are
    treated as the same kind of tool regardless of their Python class.
    """

    tool_id: str
    display_name: str

    def render(self, ctx: ToolContext) -> ToolView:
        """Produce the tool's view. Opaque to the registry."""


class DiagnosticsProvider(Protocol):
    """A named grouping of related diagnostic tools (declared order is display order)."""

    provider_id: str
    service_name: str

    @property
    def diagnostic_tools(self) -> Sequence[DiagnosticTool]: ...
