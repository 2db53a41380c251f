from __future__ import annotations

import os
import platform
import socket
from importlib import metadata
from typing import Dict, List, Optional

from overlay.core.models import PropertyEntry, ToolView, ViewRow, ViewSection
from overlay.diagnostics.base import ToolContext


def _distribution_version(name: Optional[str]) -> str:
    if not name:
        return "unknown"
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "unknown"


def collect_properties(ctx: ToolContext) -> List[PropertyEntry]:
    """Application + runtime properties, sorted by key. Host extras win on collisions."""
    props: Dict[str, str] = {
        "app.name": ctx.config.app_name,
        "app.version": _distribution_version(ctx.config.app_distribution),
        "python.version": platform.python_version(),
        "python.implementation": platform.python_implementation(),
        "os.platform": platform.platform(),
        "os.machine": platform.machine() or "unknown",
        "host.name": socket.gethostname(),
        "process.pid": str(os.getpid()),
    }
    props.update({str(k): str(v) for k, v in (ctx.extra_properties or {}).items()})
    return [PropertyEntry(key=k, value=props[k]) for k in sorted(props)]


class PropertyListTool:
    tool_id = "property_list"
    display_name = "Property List"

    def render(self, ctx: ToolContext) -> ToolView:
        rows = [ViewRow(key=p.key, value=p.value) for p in collect_properties(ctx)]
        return ToolView(
            tool_id=self.tool_id,
            title=self.display_name,
            sections=[ViewSection(title="Properties", rows=rows)],
        )
