"""Writes one activity record per elapsed work-session second."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .activity_log import ActivityLogError, ActivityLogStore
from .clock import ClockEvent, SessionClock, Ticked
from .models import ActivityRecord, SessionType
from .probe import ForegroundProbe

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivitySampler:
    """Samples the foreground application while a work session runs."""

    def __init__(
        self,
        store: ActivityLogStore,
        probe: ForegroundProbe,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self._probe = probe
        self._now = clock

    def attach(self, clock: SessionClock) -> Callable[[], None]:
        return clock.subscribe(self.handle_event)

    def handle_event(self, event: ClockEvent) -> None:
        if isinstance(event, Ticked):
            self.sample_if_work_session(event.session_type)

    def sample_if_work_session(self, session_type: SessionType) -> Optional[ActivityRecord]:
        if session_type is not SessionType.WORK:
            return None

        try:
            app_name, window_title = self._probe.get_active_window()
        except Exception:
            logger.exception("Foreground probe failed; skipping sample.")
            return None
        # No foreground application means no record for this tick.
        if app_name is None:
            return None

        record = ActivityRecord(
            timestamp=self._now(),
            app_name=app_name.strip() or "Unknown",
            window_title=window_title or "",
            session_type=SessionType.WORK,
        )
        try:
            self.store.append(record)
        except ActivityLogError:
            logger.exception("Could not record activity sample.")
            return None
        logger.debug("Sampled app=%s title=%s", record.app_name, record.window_title)
        return record
