from __future__ import annotations

import asyncio
import io

import pytest


def _presenter(ctx=None):  # type: ignore[no-untyped-def]
    from overlay.diagnostics.registry import DiagnosticRegistry
    from overlay.presentation.presenter import DiagnosticsPresenter

    return DiagnosticsPresenter(DiagnosticRegistry(), ctx)


def test_present_without_surface_is_silent_noop() -> None:
    p = _presenter()
    assert p.present() is False
    assert asyncio.run(p.handle_trigger()) is False


def test_attach_registers_builtins_once_and_menu_is_never_empty() -> None:
    from overlay.presentation.surfaces import RecordingSurface

    p = _presenter()
    surface = RecordingSurface()
    p.attach(surface)
    p.attach(surface)

    assert asyncio.run(p.handle_trigger()) is True
    menu = surface.last_menu
    assert menu is not None and not menu.is_empty
    assert [e.provider_id for e in menu.providers] == ["general"]
    assert [t.tool_id for t in menu.providers[0].tools] == ["property_list", "logs"]


def test_trigger_shows_menu_only_when_authenticated() -> None:
    from overlay.auth.authenticator import CompletionAuthenticator
    from overlay.presentation.surfaces import RecordingSurface

    p = _presenter()
    surface = RecordingSurface()
    p.attach(surface, CompletionAuthenticator(lambda completion: completion(False)))
    assert asyncio.run(p.handle_trigger()) is False
    assert not surface.menus

    p.attach(surface, CompletionAuthenticator(lambda completion: completion(True)))
    assert asyncio.run(p.handle_trigger()) is True
    assert len(surface.menus) == 1


def test_authenticator_that_never_completes_never_presents() -> None:
    from overlay.auth.authenticator import CompletionAuthenticator
    from overlay.presentation.surfaces import RecordingSurface

    p = _presenter()
    surface = RecordingSurface()
    p.attach(surface, CompletionAuthenticator(lambda completion: None))

    async def _run() -> None:
        task = asyncio.ensure_future(p.handle_trigger())
        await asyncio.sleep(0.05)
        assert not task.done()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(_run())
    assert not surface.menus

    p.auth_timeout = 0.02
    assert asyncio.run(p.handle_trigger()) is False
    assert not surface.menus


def test_menu_reflects_hide_lists_at_query_time(make_provider) -> None:
    from overlay.presentation.surfaces import RecordingSurface

    p = _presenter()
    p.registry.register(make_provider("custom", ["a", "b"], service_name="Custom"))
    p.attach(RecordingSurface())

    p.registry.hide_tool("logs")
    p.registry.hide_tool("b")
    menu = p.menu()
    assert [(e.provider_id, [t.tool_id for t in e.tools]) for e in menu.providers] == [
        ("custom", ["a"]),
        ("general", ["property_list"]),
    ]


def test_present_tool_renders_visible_tool(tool_ctx) -> None:
    from overlay.core.errors import ToolNotFoundError
    from overlay.presentation.surfaces import RecordingSurface

    p = _presenter(tool_ctx)
    surface = RecordingSurface()
    p.attach(surface)

    assert p.present_tool("property_list") is True
    assert surface.tools[-1].title == "Property List"

    p.registry.hide_tool("property_list")
    with pytest.raises(ToolNotFoundError):
        p.present_tool("property_list")


def test_render_requires_context() -> None:
    p = _presenter()
    p.registry.register_builtin_services()
    with pytest.raises(RuntimeError):
        p.render("logs")


def test_terminal_surface_output(tool_ctx) -> None:
    from overlay.presentation.surfaces import TerminalSurface

    out = io.StringIO()
    p = _presenter(tool_ctx)
    p.attach(TerminalSurface(out))
    p.present()
    p.present_tool("logs")

    text = out.getvalue()
    assert "General (general)" in text
    assert "  - Property List [property_list]" in text
    assert "Logging Enabled: off" in text
    assert "(none)" in text


def test_terminal_surface_empty_menu() -> None:
    from overlay.core.models import DiagnosticsMenu
    from overlay.presentation.surfaces import TerminalSurface

    out = io.StringIO()
    TerminalSurface(out).show_menu(DiagnosticsMenu())
    assert out.getvalue().strip() == "No diagnostic tools available."


def test_find_tool_filters_by_provider(make_provider) -> None:
    from overlay.diagnostics.registry import DiagnosticRegistry
    from overlay.presentation.menu import find_tool

    reg = DiagnosticRegistry()
    first = make_provider("first", ["shared", "only_first"])
    second = make_provider("second", ["shared"])
    reg.register(first)
    reg.register(second)

    assert find_tool(reg, "shared") is first.diagnostic_tools[0]
    assert find_tool(reg, "shared", provider_id="second") is second.diagnostic_tools[0]
    assert find_tool(reg, "only_first", provider_id="second") is None
    assert find_tool(reg, "shared", provider_id="missing") is None

    reg.hide_provider("first")
    assert find_tool(reg, "shared") is second.diagnostic_tools[0]
    assert find_tool(reg, "only_first") is None
