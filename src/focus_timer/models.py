"""Domain models for focus sessions and recorded activity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


ISO_FMT = "%Y-%m-%dT%H:%M:%SZ"


class SessionType(Enum):
    """The two kinds of session the timer alternates between."""

    WORK = "work"
    BREAK = "break"

    def toggled(self) -> "SessionType":
        return SessionType.BREAK if self is SessionType.WORK else SessionType.WORK

    @property
    def label(self) -> str:
        return "Focus Session" if self is SessionType.WORK else "Break Time"


@dataclass(frozen=True, slots=True)
class ActivityRecord:
    """A single one-second observation of the foreground application."""

    timestamp: datetime
    app_name: str
    window_title: str
    session_type: SessionType = SessionType.WORK

    @property
    def timestamp_text(self) -> str:
        stamp = self.timestamp
        if stamp.tzinfo is not None:
            stamp = stamp.astimezone(timezone.utc)
        return stamp.strftime(ISO_FMT)


@dataclass(frozen=True, slots=True)
class AppStat:
    """Share of sampled time spent in one application."""

    app_name: str
    sample_count: int
    percentage: float
