from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import pytest


class FakeProbe:
    def __init__(self, *targets: tuple[Optional[str], Optional[str]]) -> None:
        self.targets = list(targets) or [("Safari", "Inbox")]
        self.calls = 0

    def get_active_window(self) -> tuple[Optional[str], Optional[str]]:
        target = self.targets[min(self.calls, len(self.targets) - 1)]
        self.calls += 1
        return target


class ManualTicker:
    """Stands in for the one-second thread; tests fire ticks explicitly."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.running = False
        self.start_calls = 0

    def start(self) -> None:
        self.start_calls += 1
        self.running = True

    def stop(self) -> None:
        self.running = False

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            self.callback()


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "pomodoro_focus_log.csv"


@pytest.fixture
def tickers() -> list[ManualTicker]:
    return []


@pytest.fixture
def ticker_factory(tickers: list[ManualTicker]) -> Callable[[Callable[[], None]], ManualTicker]:
    def factory(callback: Callable[[], None]) -> ManualTicker:
        ticker = ManualTicker(callback)
        tickers.append(ticker)
        return ticker

    return factory
