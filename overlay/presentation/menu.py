from __future__ import annotations

from typing import Optional

from overlay.core.errors import ToolNotFoundError
from overlay.core.models import DiagnosticsMenu, ProviderEntry, ToolEntry, ToolView
from overlay.diagnostics.base import DiagnosticTool, ToolContext
from overlay.diagnostics.registry import DiagnosticRegistry


def build_menu(registry: DiagnosticRegistry) -> DiagnosticsMenu:
    entries = []
    for p in registry.visible_providers():
        tools = [ToolEntry(tool_id=t.tool_id, display_name=t.display_name) for t in registry.visible_tools(p)]
        # Hide-lists may have grown between the two queries.
        if not tools:
            continue
        entries.append(ProviderEntry(provider_id=p.provider_id, service_name=p.service_name, tools=tools))
    return DiagnosticsMenu(providers=entries)


def find_tool(registry: DiagnosticRegistry, tool_id: str, provider_id: Optional[str] = None) -> Optional[DiagnosticTool]:
    for p in registry.visible_providers():
        if provider_id is not None and p.provider_id != provider_id:
            continue
        for t in registry.visible_tools(p):
            if t.tool_id == tool_id:
                return t
    return None


def render_tool(
    registry: DiagnosticRegistry, tool_id: str, ctx: ToolContext, provider_id: Optional[str] = None
) -> ToolView:
    tool = find_tool(registry, tool_id, provider_id=provider_id)
    if tool is None:
        raise ToolNotFoundError(tool_id)
    return tool.render(ctx)
