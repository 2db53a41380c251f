from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence, Set

from overlay.diagnostics.base import DiagnosticsProvider, DiagnosticTool

logger = logging.getLogger(__name__)


@dataclass
class DiagnosticRegistry:
    """
    Registered providers plus append-only hide-lists.

    Visibility is recomputed on every query (hide-lists may grow after registration) and
    ordering is stable: registration order for providers, declaration order for tools.
    Mutations are serialised; queries work on a snapshot taken under the lock.
    """

    _providers: List[DiagnosticsProvider] = field(default_factory=list)
    _hidden_providers: Set[str] = field(default_factory=set)
    _hidden_tools: Set[str] = field(default_factory=set)
    _builtins_registered: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def register(self, provider: DiagnosticsProvider) -> None:
        # No uniqueness check: the same provider id registered twice yields two entries.
        with self._lock:
            self._providers.append(provider)
        logger.debug("Registered diagnostics provider: %s", getattr(provider, "provider_id", "unknown"))

    def hide_provider(self, provider_id: str) -> None:
        with self._lock:
            self._hidden_providers.add(provider_id)
        logger.debug("Hiding diagnostics provider: %s", provider_id)

    def hide_tool(self, tool_id: str) -> None:
        with self._lock:
            self._hidden_tools.add(tool_id)
        logger.debug("Hiding diagnostic tool: %s", tool_id)

    @property
    def providers(self) -> List[DiagnosticsProvider]:
        """Everything registered, hidden or not."""
        with self._lock:
            return list(self._providers)

    @property
    def hidden_provider_ids(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._hidden_providers)

    @property
    def hidden_tool_ids(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._hidden_tools)

    def visible_tools(self, provider: DiagnosticsProvider) -> List[DiagnosticTool]:
        return _filter_tools(provider, self.hidden_tool_ids)

    def visible_providers(self) -> List[DiagnosticsProvider]:
        with self._lock:
            providers = list(self._providers)
            hidden_providers = frozenset(self._hidden_providers)
            hidden_tools = frozenset(self._hidden_tools)

        out: List[DiagnosticsProvider] = []
        for p in providers:
            if getattr(p, "provider_id", None) in hidden_providers:
                continue
            # A provider whose tools are all hidden is dropped even if never hidden directly.
            if _filter_tools(p, hidden_tools):
                out.append(p)
        return out

    def register_builtin_services(self) -> bool:
        """
        Register the built-in providers once per registry.

        Returns True if this call registered them, False if they were already present.
        """
        from overlay.diagnostics.builtin import DEFAULT_PROVIDER_CLASSES  # noqa: WPS433

        with self._lock:
            if self._builtins_registered:
                return False
            self._builtins_registered = True
            for cls in DEFAULT_PROVIDER_CLASSES:
                self._providers.append(cls())
        logger.debug("Registered built-in diagnostics providers: %d", len(DEFAULT_PROVIDER_CLASSES))
        return True


def _filter_tools(provider: DiagnosticsProvider, hidden_tools: FrozenSet[str]) -> List[DiagnosticTool]:
    try:
        tools: Sequence[DiagnosticTool] = provider.diagnostic_tools
    except Exception as e:
        # Host-supplied providers must not be able to break the whole menu.
        logger.warning("Diagnostics(%s): diagnostic_tools error: %s", getattr(provider, "provider_id", "unknown"), e)
        return []
    return [t for t in tools if getattr(t, "tool_id", None) not in hidden_tools]


_DEFAULT_REGISTRY: DiagnosticRegistry | None = None
_DEFAULT_LOCK = threading.Lock()


def get_default_registry() -> DiagnosticRegistry:
    """
    Process-wide convenience registry, created lazily on first access.

    Components should accept a registry explicitly; this exists for hosts that want a single
    shared instance. Env-configured hide-lists (OVERLAY_HIDDEN_*) are applied on creation.
    """
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is not None:
        return _DEFAULT_REGISTRY
    with _DEFAULT_LOCK:
        if _DEFAULT_REGISTRY is not None:
            return _DEFAULT_REGISTRY
        from overlay.core.config import load_overlay_config

        cfg = load_overlay_config()
        reg = DiagnosticRegistry()
        for provider_id in cfg.hidden_providers:
            reg.hide_provider(provider_id)
        for tool_id in cfg.hidden_tools:
            reg.hide_tool(tool_id)
        _DEFAULT_REGISTRY = reg
        return reg


def reset_default_registry() -> Optional[DiagnosticRegistry]:
    """Drop the process-wide registry (tests only). Returns the previous instance."""
    global _DEFAULT_REGISTRY
    with _DEFAULT_LOCK:
        prev = _DEFAULT_REGISTRY
        _DEFAULT_REGISTRY = None
        return prev
