"""Built-in diagnostic tools."""

from .logs import LogsTool
from .property_list import PropertyListTool

__all__ = ["LogsTool", "PropertyListTool"]
