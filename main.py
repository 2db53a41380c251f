#!/usr/bin/env python3
"""
Diagnostics Overlay - command line front end.
Shows the diagnostics menu and tools in the terminal, manages session logs, or serves the console.
"""

import argparse
import logging
import os
import sys

# Configure logging
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)

#
# NOTE: Keep overlay imports lazy (inside functions) so `--serve` only pays for what it uses.
#


def _build_presenter(hidden_providers, hidden_tools, surface=None):
    from overlay.bootstrap import build_presenter
    from overlay.diagnostics.registry import get_default_registry
    from overlay.presentation.surfaces import TerminalSurface

    registry = get_default_registry()
    for provider_id in hidden_providers or []:
        registry.hide_provider(provider_id)
    for tool_id in hidden_tools or []:
        registry.hide_tool(tool_id)
    return build_presenter(surface if surface is not None else TerminalSurface(), registry=registry)


def list_logs() -> None:
    from overlay.bootstrap import build_tool_context
    from overlay.logs.store import format_byte_count

    ctx = build_tool_context()
    files = ctx.log_store.list_files()
    print(f"Logging: {'on' if ctx.settings.logging_enabled else 'off'} ({ctx.log_store.directory})")
    if not files:
        print("No log files.")
        return
    for f in files:
        size = format_byte_count(f.size_bytes) if f.size_bytes is not None else "?"
        print(f"{f.created_at.strftime('%Y-%m-%d %H:%MZ')}  {size:>10}  {f.name}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="In-app diagnostics overlay",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--menu", action="store_true", help="Print the visible diagnostics menu")
    parser.add_argument("--tool", metavar="TOOL_ID", help="Render a diagnostic tool (e.g. property_list, logs)")
    parser.add_argument("--list-logs", action="store_true", help="List session log files, newest first")
    parser.add_argument("--read-log", metavar="NAME", help="Print the contents of a log file")
    parser.add_argument("--delete-logs", action="store_true", help="Delete all session log files")
    parser.add_argument("--logging", choices=["on", "off"], help="Enable/disable session logging")
    parser.add_argument(
        "--hide-provider", action="append", default=[], metavar="ID", help="Hide a provider (repeatable)"
    )
    parser.add_argument("--hide-tool", action="append", default=[], metavar="ID", help="Hide a tool (repeatable)")
    parser.add_argument("--serve", action="store_true", help="Run the diagnostics console HTTP server")
    parser.add_argument("--host", default="127.0.0.1", help="Console bind host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8080, help="Console port (default: 8080)")

    args = parser.parse_args()

    try:
        if args.serve:
            from overlay.api.console import run as run_console
            from overlay.presentation.surfaces import RecordingSurface

            presenter = _build_presenter(args.hide_provider, args.hide_tool, surface=RecordingSurface())
            run_console(host=args.host, port=args.port, presenter=presenter)
            return

        if args.logging is not None:
            from overlay.bootstrap import build_tool_context

            ctx = build_tool_context()
            ctx.settings.logging_enabled = args.logging == "on"
            print(f"Logging {args.logging}")
            return

        if args.list_logs:
            list_logs()
            return

        if args.read_log:
            from overlay.bootstrap import build_tool_context

            print(build_tool_context().log_store.read(args.read_log), end="")
            return

        if args.delete_logs:
            from overlay.bootstrap import build_tool_context

            removed = build_tool_context().log_store.delete_all()
            print(f"Deleted {removed} log file(s)")
            return

        if args.tool:
            presenter = _build_presenter(args.hide_provider, args.hide_tool)
            presenter.present_tool(args.tool)
            return

        if args.menu:
            presenter = _build_presenter(args.hide_provider, args.hide_tool)
            presenter.present()
            return

        # No arguments provided
        parser.print_help()
        print("\nTip: Use `--menu` to see available diagnostic tools")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        raise


if __name__ == "__main__":
    main()
