"""View models shared by the registry, the tools and the presentation surfaces.

Tools render into these; surfaces (terminal, JSON console) only ever see these models,
never the tool objects themselves.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseModelStrict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ViewRow(BaseModelStrict):
    key: str
    value: Optional[str] = None


class ViewSection(BaseModelStrict):
    title: str
    rows: List[ViewRow] = Field(default_factory=list)


class ToolView(BaseModelStrict):
    tool_id: str
    title: str
    sections: List[ViewSection] = Field(default_factory=list)


class ToolEntry(BaseModelStrict):
    tool_id: str
    display_name: str


class ProviderEntry(BaseModelStrict):
    provider_id: str
    service_name: str
    tools: List[ToolEntry] = Field(default_factory=list)


class DiagnosticsMenu(BaseModelStrict):
    providers: List[ProviderEntry] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.providers


class PropertyEntry(BaseModelStrict):
    key: str
    value: str


class LogFile(BaseModelStrict):
    name: str
    path: str
    created_at: datetime
    size_bytes: Optional[int] = None
