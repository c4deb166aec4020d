"""Configuration models and the persisted settings store."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5

WORK_DURATION_KEY = "workDuration"
BREAK_DURATION_KEY = "breakDuration"
TICK_SOUND_KEY = "enableTickSound"


class SettingsError(Exception):
    """Raised when the settings file cannot be written."""


def positive_minutes(value: Any, default: int) -> int:
    """Return ``value`` as whole minutes, or ``default`` when it is not positive."""
    if isinstance(value, bool):
        return default
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        return default
    return minutes if minutes > 0 else default


@dataclass(slots=True)
class TimerSettings:
    """Durations and options for the session clock."""

    work_minutes: int = DEFAULT_WORK_MINUTES
    break_minutes: int = DEFAULT_BREAK_MINUTES
    tick_sound_enabled: bool = False

    @classmethod
    def from_values(
        cls,
        work_minutes: Any = None,
        break_minutes: Any = None,
        tick_sound_enabled: Any = False,
    ) -> "TimerSettings":
        return cls(
            work_minutes=positive_minutes(work_minutes, DEFAULT_WORK_MINUTES),
            break_minutes=positive_minutes(break_minutes, DEFAULT_BREAK_MINUTES),
            tick_sound_enabled=bool(tick_sound_enabled),
        )

    @property
    def work_seconds(self) -> int:
        return self.work_minutes * 60

    @property
    def break_seconds(self) -> int:
        return self.break_minutes * 60


class SettingsStore:
    """Key-value settings persisted as a small JSON document."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError:
            logger.warning("Could not read settings from %s; using defaults.", self.path)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Settings file %s is corrupt; using defaults.", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.update({key: value})

    def update(self, values: dict[str, Any]) -> None:
        data = self._read()
        data.update(values)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f"Failed to write settings to {self.path}") from exc

    def load(self) -> TimerSettings:
        data = self._read()
        return TimerSettings.from_values(
            work_minutes=data.get(WORK_DURATION_KEY),
            break_minutes=data.get(BREAK_DURATION_KEY),
            tick_sound_enabled=data.get(TICK_SOUND_KEY, False),
        )

    def save(self, settings: TimerSettings) -> None:
        self.update(
            {
                WORK_DURATION_KEY: settings.work_minutes,
                BREAK_DURATION_KEY: settings.break_minutes,
                TICK_SOUND_KEY: settings.tick_sound_enabled,
            }
        )
        logger.debug("Saved settings to %s", self.path)
