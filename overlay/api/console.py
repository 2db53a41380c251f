"""
Diagnostics console.

JSON HTTP surface over the presenter: the menu, rendered tool views, and log file management.
Everything except /healthz is gated by the host authenticator (and the console token, when set).
"""

from __future__ import annotations

import hmac
import logging
import os
import time
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from overlay.core.config import OverlayConfig, load_overlay_config
from overlay.core.errors import LogFileNotFoundError, ToolNotFoundError
from overlay.core.models import DiagnosticsMenu, LogFile, ToolView
from overlay.logs.session import LOG_FORMAT, SessionLog
from overlay.presentation.presenter import DiagnosticsPresenter
from overlay.presentation.surfaces import RecordingSurface

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Overlay-Token"
_PUBLIC_PATHS = {"/healthz"}


class LoggingSettings(BaseModel):
    loggingEnabled: bool


def _token_ok(cfg: OverlayConfig, request: Request) -> bool:
    if not cfg.console_auth_enabled:
        return True
    supplied = request.headers.get(TOKEN_HEADER) or ""
    return hmac.compare_digest(supplied.encode("utf-8"), (cfg.console_token or "").encode("utf-8"))


def create_app(presenter: DiagnosticsPresenter, cfg: Optional[OverlayConfig] = None) -> FastAPI:
    if presenter.ctx is None:
        raise ValueError("console requires a presenter with a ToolContext")
    cfg = cfg or presenter.ctx.config
    ctx = presenter.ctx
    if presenter.surface is None:
        presenter.attach(RecordingSurface(), presenter.authenticator)
    session_log = SessionLog(ctx.config.log_dir, ctx.settings)

    app = FastAPI(title="Diagnostics Overlay Console")
    app.state.presenter = presenter
    app.state.session_log = session_log

    @app.on_event("startup")
    async def _start_session_log() -> None:
        session_log.start()

    @app.on_event("shutdown")
    async def _stop_session_log() -> None:
        session_log.stop()

    @app.middleware("http")
    async def gate_requests(request: Request, call_next):
        start_time = time.time()
        path = request.url.path or ""
        logger.debug("%s %s", request.method, path)
        if request.method != "OPTIONS" and path not in _PUBLIC_PATHS:
            # Deny is a normal outcome, not an error; no WWW-Authenticate (no browser prompt).
            if not _token_ok(cfg, request) or not await presenter.authorize():
                return JSONResponse(status_code=403, content={"detail": "Forbidden"})
        response = await call_next(request)
        logger.debug("%s %s - %d (%.3fs)", request.method, path, response.status_code, time.time() - start_time)
        return response

    @app.get("/healthz")
    def healthz() -> Dict[str, Any]:
        return {"ok": True}

    @app.post("/api/v1/diagnostics/present")
    def present() -> DiagnosticsMenu:
        presenter.present()
        surface = presenter.surface
        last = surface.last_menu if isinstance(surface, RecordingSurface) else None
        return last if last is not None else presenter.menu()

    @app.get("/api/v1/diagnostics/menu")
    def menu() -> DiagnosticsMenu:
        return presenter.menu()

    @app.get("/api/v1/diagnostics/tools/{tool_id}")
    def tool(tool_id: str, provider: Optional[str] = None) -> ToolView:
        try:
            return presenter.render(tool_id, provider_id=provider)
        except ToolNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e

    @app.get("/api/v1/logs/settings")
    def get_logging_settings() -> LoggingSettings:
        return LoggingSettings(loggingEnabled=ctx.settings.logging_enabled)

    @app.put("/api/v1/logs/settings")
    def put_logging_settings(body: LoggingSettings) -> LoggingSettings:
        session_log.apply(body.loggingEnabled)
        return LoggingSettings(loggingEnabled=ctx.settings.logging_enabled)

    @app.get("/api/v1/logs")
    def list_logs() -> List[LogFile]:
        return ctx.log_store.list_files()

    @app.delete("/api/v1/logs")
    def delete_logs() -> Dict[str, Any]:
        # The active session file is recreated on the next start(); release it first.
        was_active = session_log.active
        session_log.stop()
        removed = ctx.log_store.delete_all()
        if was_active:
            session_log.start()
        return {"ok": True, "deleted": removed}

    @app.get("/api/v1/logs/{name}")
    def read_log(name: str) -> Dict[str, Any]:
        try:
            meta = ctx.log_store.get(name)
            content = ctx.log_store.read(name)
        except LogFileNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        return {"file": meta.model_dump(mode="json"), "content": content}

    @app.delete("/api/v1/logs/{name}")
    def delete_log(name: str) -> Dict[str, Any]:
        # Deleting the active session file: release it and continue in a fresh one.
        active_path = session_log.path
        is_active = active_path is not None and os.path.basename(active_path) == name
        if is_active:
            session_log.stop()
        try:
            ctx.log_store.delete(name)
        except LogFileNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        finally:
            if is_active:
                session_log.start()
        return {"ok": True}

    return app


def run(host: str = "127.0.0.1", port: int = 8080, presenter: Optional[DiagnosticsPresenter] = None) -> None:
    import uvicorn

    from overlay.bootstrap import build_presenter

    log_level = os.getenv("LOG_LEVEL", "info").upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO), format=LOG_FORMAT)
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    uvicorn_log_level = (
        log_level.lower() if log_level.lower() in ["critical", "error", "warning", "info", "debug", "trace"] else "info"
    )

    if presenter is None:
        presenter = build_presenter(RecordingSurface(), cfg=load_overlay_config())
    app = create_app(presenter)
    logger.info("Starting diagnostics console on %s:%d (log_level=%s)", host, port, log_level)
    uvicorn.run(app, host=host, port=port, log_level=uvicorn_log_level)
