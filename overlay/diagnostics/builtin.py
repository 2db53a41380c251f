from __future__ import annotations

from typing import List, Sequence, Type

from overlay.diagnostics.base import DiagnosticTool
from overlay.tools.logs import LogsTool
from overlay.tools.property_list import PropertyListTool


class GeneralServices:
    """The services provided by default."""

    provider_id = "general"
    service_name = "General"

    @property
    def diagnostic_tools(self) -> Sequence[DiagnosticTool]:
        return [PropertyListTool(), LogsTool()]


# Built-in providers, in registration order.
DEFAULT_PROVIDER_CLASSES: List[Type] = [
    GeneralServices,
]
