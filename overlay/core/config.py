from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional


@dataclass(frozen=True)
class OverlayConfig:
    # Application identity (shown by the property list tool)
    app_name: str
    app_distribution: Optional[str]  # Installed distribution used for the version lookup

    # Log viewer / session logging
    log_dir: str
    settings_path: str

    # Hide-lists applied to the process-wide default registry
    hidden_providers: List[str]
    hidden_tools: List[str]

    # Authentication gating
    auth_timeout_seconds: Optional[float]  # None = wait for the host indefinitely
    console_token: Optional[str]

    @property
    def console_auth_enabled(self) -> bool:
        return bool(self.console_token)


def _parse_csv(value: str) -> List[str]:
    items = [x.strip() for x in (value or "").split(",")]
    return [x for x in items if x]


def _parse_timeout(value: str) -> Optional[float]:
    raw = (value or "").strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        return None
    return timeout if timeout > 0 else None


@lru_cache(maxsize=1)
def load_overlay_config() -> OverlayConfig:
    """
    Load overlay configuration from environment variables.

    Hide-lists are comma separated identifiers (OVERLAY_HIDDEN_PROVIDERS, OVERLAY_HIDDEN_TOOLS).
    Console auth is enabled when OVERLAY_CONSOLE_TOKEN is set.
    """
    return OverlayConfig(
        app_name=(os.getenv("OVERLAY_APP_NAME", "") or "app").strip(),
        app_distribution=(os.getenv("OVERLAY_APP_DISTRIBUTION", "") or "").strip() or None,
        log_dir=(os.getenv("OVERLAY_LOG_DIR", "") or "./logs").strip(),
        settings_path=(os.getenv("OVERLAY_SETTINGS_PATH", "") or "./overlay_settings.json").strip(),
        hidden_providers=_parse_csv(os.getenv("OVERLAY_HIDDEN_PROVIDERS", "")),
        hidden_tools=_parse_csv(os.getenv("OVERLAY_HIDDEN_TOOLS", "")),
        auth_timeout_seconds=_parse_timeout(os.getenv("OVERLAY_AUTH_TIMEOUT_SECONDS", "")),
        console_token=(os.getenv("OVERLAY_CONSOLE_TOKEN", "") or "").strip() or None,
    )
