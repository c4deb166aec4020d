"""FastAPI application exposing a local API for the focus timer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict

from .clock import IntervalTicker, SessionCompleted, TickerFactory
from .config import SettingsError, SettingsStore, TimerSettings
from .notifications import completion_message
from .paths import get_activity_log_path, get_settings_path
from .probe import ForegroundProbe, default_probe
from .session import FocusSession
from .stats import format_duration

logger = logging.getLogger(__name__)


class SettingsPayload(BaseModel):
    work_minutes: int
    break_minutes: int
    tick_sound_enabled: bool = False

    model_config = ConfigDict(extra="forbid")


def create_app(
    *,
    log_path: Optional[Path] = None,
    settings_path: Optional[Path] = None,
    probe: Optional[ForegroundProbe] = None,
    ticker_factory: TickerFactory = IntervalTicker,
) -> FastAPI:
    """Instantiate the FastAPI application."""
    settings_store = SettingsStore(settings_path or get_settings_path())
    session = FocusSession(
        log_path or get_activity_log_path(),
        settings_store.load(),
        probe=probe or default_probe(),
        ticker_factory=ticker_factory,
    )

    app = FastAPI(title="Focus Timer", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.session = session
    app.state.settings_store = settings_store
    app.state.last_notification = None

    def _remember_completion(event: Any) -> None:
        if isinstance(event, SessionCompleted):
            message = completion_message(event.completed)
            app.state.last_notification = {"title": message.title, "body": message.body}
            logger.info("%s %s", message.title, message.body)

    session.clock.subscribe(_remember_completion)

    @app.on_event("startup")
    async def _startup() -> None:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        session.close()

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        return _status_payload(request.app)

    @app.post("/api/timer/start")
    def start_timer(request: Request) -> Dict[str, Any]:
        request.app.state.session.clock.start()
        return _status_payload(request.app)

    @app.post("/api/timer/pause")
    def pause_timer(request: Request) -> Dict[str, Any]:
        request.app.state.session.clock.pause()
        return _status_payload(request.app)

    @app.post("/api/timer/reset")
    def reset_timer(request: Request) -> Dict[str, Any]:
        request.app.state.session.clock.reset()
        return _status_payload(request.app)

    @app.get("/api/stats")
    def stats(request: Request) -> Dict[str, Any]:
        entries = request.app.state.session.stats()
        total = sum(entry.sample_count for entry in entries)
        return {
            "total_samples": total,
            "total_time": format_duration(total),
            "entries": [
                {
                    "app_name": entry.app_name,
                    "sample_count": entry.sample_count,
                    "percentage": entry.percentage,
                }
                for entry in entries
            ],
        }

    @app.get("/api/settings")
    def get_settings(request: Request) -> Dict[str, Any]:
        return _settings_payload(request.app.state.session.settings)

    @app.put("/api/settings")
    def update_settings(payload: SettingsPayload, request: Request) -> Dict[str, Any]:
        if payload.work_minutes <= 0 or payload.break_minutes <= 0:
            raise HTTPException(
                status_code=400, detail="durations must be positive whole minutes"
            )
        new_settings = TimerSettings(
            work_minutes=payload.work_minutes,
            break_minutes=payload.break_minutes,
            tick_sound_enabled=payload.tick_sound_enabled,
        )
        try:
            request.app.state.settings_store.save(new_settings)
        except SettingsError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        request.app.state.session.apply_settings(new_settings)
        return _settings_payload(new_settings)

    return app


def _status_payload(app: FastAPI) -> Dict[str, Any]:
    session: FocusSession = app.state.session
    clock = session.clock
    return {
        "time": clock.time_text,
        "remaining_seconds": clock.remaining_seconds,
        "session_type": clock.session_type.value,
        "session_label": clock.session_type.label,
        "running": clock.is_running,
        "log_path": str(session.log_path),
        "last_notification": app.state.last_notification,
    }


def _settings_payload(settings: TimerSettings) -> Dict[str, Any]:
    return {
        "work_minutes": settings.work_minutes,
        "break_minutes": settings.break_minutes,
        "tick_sound_enabled": settings.tick_sound_enabled,
    }
