from __future__ import annotations

import logging
from typing import Optional

from overlay.auth.authenticator import Authenticator, authorize_presentation
from overlay.core.models import DiagnosticsMenu, ToolView
from overlay.diagnostics.base import ToolContext
from overlay.diagnostics.registry import DiagnosticRegistry
from overlay.presentation.menu import build_menu, render_tool
from overlay.presentation.surfaces import PresentationSurface

logger = logging.getLogger(__name__)


class DiagnosticsPresenter:
    """
    Shows the diagnostics menu on an attached surface, behind optional host authentication.

    The registry is injected; nothing here reaches for a process-wide instance.
    """

    def __init__(
        self,
        registry: DiagnosticRegistry,
        ctx: Optional[ToolContext] = None,
        *,
        auth_timeout: Optional[float] = None,
    ):
        self.registry = registry
        self.ctx = ctx
        self.auth_timeout = auth_timeout
        self._surface: Optional[PresentationSurface] = None
        self._authenticator: Optional[Authenticator] = None

    @property
    def surface(self) -> Optional[PresentationSurface]:
        return self._surface

    @property
    def authenticator(self) -> Optional[Authenticator]:
        return self._authenticator

    def attach(self, surface: PresentationSurface, authenticator: Optional[Authenticator] = None) -> None:
        """Attach a surface (and optional gate). Built-in services are registered on first attach."""
        if self.registry.register_builtin_services():
            logger.info("Registered built-in diagnostics services")
        self._surface = surface
        self._authenticator = authenticator

    async def authorize(self) -> bool:
        return await authorize_presentation(self._authenticator, timeout=self.auth_timeout)

    async def handle_trigger(self) -> bool:
        """Authenticate, then present. Returns True if the menu was shown."""
        if not await self.authorize():
            return False
        return self.present()

    def menu(self) -> DiagnosticsMenu:
        return build_menu(self.registry)

    def present(self) -> bool:
        surface = self._surface
        if surface is None:
            return False
        surface.show_menu(self.menu())
        return True

    def render(self, tool_id: str, provider_id: Optional[str] = None) -> ToolView:
        if self.ctx is None:
            raise RuntimeError("DiagnosticsPresenter has no ToolContext; pass ctx= to render tools")
        return render_tool(self.registry, tool_id, self.ctx, provider_id=provider_id)

    def present_tool(self, tool_id: str, provider_id: Optional[str] = None) -> bool:
        """Render a visible tool onto the surface. Raises ToolNotFoundError if hidden/unknown."""
        surface = self._surface
        if surface is None:
            return False
        surface.show_tool(self.render(tool_id, provider_id=provider_id))
        return True
