"""Diagnostic providers, tools and the visibility-filtering registry."""

from .base import DiagnosticsProvider, DiagnosticTool, ToolContext
from .registry import DiagnosticRegistry, get_default_registry

__all__ = ["DiagnosticTool", "DiagnosticsProvider", "ToolContext", "DiagnosticRegistry", "get_default_registry"]
