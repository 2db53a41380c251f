from __future__ import annotations

from overlay.core.models import ToolView, ViewRow, ViewSection
from overlay.diagnostics.base import ToolContext
from overlay.logs.store import format_byte_count


class LogsTool:
    """Lists session log files (newest first) plus the logging toggle."""

    tool_id = "logs"
    display_name = "Logs"

    def render(self, ctx: ToolContext) -> ToolView:
        enabled = ctx.settings.logging_enabled
        settings = ViewSection(title="Settings", rows=[ViewRow(key="Logging Enabled", value="on" if enabled else "off")])

        rows = []
        for f in ctx.log_store.list_files():
            size = format_byte_count(f.size_bytes) if f.size_bytes is not None else None
            rows.append(ViewRow(key=f.name, value=size))

        return ToolView(
            tool_id=self.tool_id,
            title=self.display_name,
            sections=[settings, ViewSection(title="Logs", rows=rows)],
        )
