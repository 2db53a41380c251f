"""
Pytest config.

Local imports like `import overlay` rely on the repo root being on sys.path. When invoking a
global `pytest` entrypoint that doesn't happen reliably during collection, so we pin it here.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()


@pytest.fixture(autouse=True)
def _isolate_process_wide_state(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """
    Keep env-driven config and the process-wide registry from leaking between tests.

    Log/settings paths point into the per-test tmp dir so nothing touches the working tree.
    """
    from overlay.core.config import load_overlay_config
    from overlay.diagnostics.registry import reset_default_registry

    for name in (
        "OVERLAY_HIDDEN_PROVIDERS",
        "OVERLAY_HIDDEN_TOOLS",
        "OVERLAY_AUTH_TIMEOUT_SECONDS",
        "OVERLAY_CONSOLE_TOKEN",
        "OVERLAY_APP_DISTRIBUTION",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("OVERLAY_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("OVERLAY_SETTINGS_PATH", str(tmp_path / "settings.json"))
    load_overlay_config.cache_clear()
    reset_default_registry()
    yield
    load_overlay_config.cache_clear()
    reset_default_registry()


class FakeTool:
    def __init__(self, tool_id: str, display_name: str | None = None):
        self.tool_id = tool_id
        self.display_name = display_name or tool_id.upper()

    def render(self, ctx):  # type: ignore[no-untyped-def]
        from overlay.core.models import ToolView, ViewRow, ViewSection

        return ToolView(
            tool_id=self.tool_id,
            title=self.display_name,
            sections=[ViewSection(title="Fake", rows=[ViewRow(key="tool", value=self.tool_id)])],
        )


class FakeProvider:
    def __init__(self, provider_id: str, tool_ids, service_name: str | None = None):  # type: ignore[no-untyped-def]
        self.provider_id = provider_id
        self.service_name = service_name or provider_id
        self._tools = [FakeTool(t) for t in tool_ids]

    @property
    def diagnostic_tools(self):  # type: ignore[no-untyped-def]
        return list(self._tools)


@pytest.fixture
def make_provider():
    return FakeProvider


@pytest.fixture
def tool_ctx(tmp_path: Path):
    from overlay.bootstrap import build_tool_context

    return build_tool_context(extra_properties={"build.flavor": "test"})
