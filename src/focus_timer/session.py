"""Wires the clock, the activity log and the sampler together."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .activity_log import ActivityLogStore
from .clock import IntervalTicker, SessionClock, TickerFactory
from .config import TimerSettings
from .models import AppStat
from .probe import ForegroundProbe, NullProbe
from .sampler import ActivitySampler
from .stats import compute_stats

logger = logging.getLogger(__name__)


class FocusSession:
    """Owns one clock, its log store and the sampler writing to it."""

    def __init__(
        self,
        log_path: Path,
        settings: Optional[TimerSettings] = None,
        *,
        probe: Optional[ForegroundProbe] = None,
        ticker_factory: TickerFactory = IntervalTicker,
    ) -> None:
        self.settings = settings or TimerSettings()
        self.store = ActivityLogStore(log_path)
        self.store.ensure_initialized()
        self.clock = SessionClock(
            self.settings.work_minutes,
            self.settings.break_minutes,
            self.settings.tick_sound_enabled,
            ticker_factory=ticker_factory,
        )
        self.sampler = ActivitySampler(self.store, probe or NullProbe())
        self.sampler.attach(self.clock)

    @property
    def log_path(self) -> Path:
        return self.store.path

    def apply_settings(self, settings: TimerSettings) -> None:
        self.settings = settings
        self.clock.load_settings(
            settings.work_minutes, settings.break_minutes, settings.tick_sound_enabled
        )
        self.clock.reset()
        logger.info(
            "Settings applied: work=%dm break=%dm tick_sound=%s",
            settings.work_minutes,
            settings.break_minutes,
            settings.tick_sound_enabled,
        )

    def stats(self) -> list[AppStat]:
        return compute_stats(self.store)

    def close(self) -> None:
        try:
            self.clock.close()
        finally:
            self.store.close()

    def __enter__(self) -> "FocusSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
