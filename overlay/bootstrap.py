from __future__ import annotations

from typing import Dict, Optional

from overlay.auth.authenticator import Authenticator
from overlay.core.config import OverlayConfig, load_overlay_config
from overlay.diagnostics.base import ToolContext
from overlay.diagnostics.registry import DiagnosticRegistry, get_default_registry
from overlay.logs.store import LogFileStore
from overlay.presentation.presenter import DiagnosticsPresenter
from overlay.presentation.surfaces import PresentationSurface
from overlay.storage.settings import SettingsStore


def build_tool_context(cfg: Optional[OverlayConfig] = None, extra_properties: Optional[Dict[str, str]] = None) -> ToolContext:
    cfg = cfg or load_overlay_config()
    return ToolContext(
        config=cfg,
        settings=SettingsStore(path=cfg.settings_path),
        log_store=LogFileStore(directory=cfg.log_dir),
        extra_properties=dict(extra_properties or {}),
    )


def build_presenter(
    surface: PresentationSurface,
    *,
    registry: Optional[DiagnosticRegistry] = None,
    authenticator: Optional[Authenticator] = None,
    cfg: Optional[OverlayConfig] = None,
    ctx: Optional[ToolContext] = None,
) -> DiagnosticsPresenter:
    """Wire a presenter from env config; defaults to the process-wide registry."""
    cfg = cfg or load_overlay_config()
    presenter = DiagnosticsPresenter(
        registry if registry is not None else get_default_registry(),
        ctx if ctx is not None else build_tool_context(cfg),
        auth_timeout=cfg.auth_timeout_seconds,
    )
    presenter.attach(surface, authenticator)
    return presenter
