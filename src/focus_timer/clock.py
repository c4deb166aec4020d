"""Work/break session state machine driven by a one-second ticker."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional, Protocol, Union

from .config import DEFAULT_BREAK_MINUTES, DEFAULT_WORK_MINUTES, positive_minutes
from .models import SessionType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RemainingTimeChanged:
    time_text: str


@dataclass(frozen=True, slots=True)
class StatusChanged:
    time_text: str
    session_type: SessionType


@dataclass(frozen=True, slots=True)
class Ticked:
    session_type: SessionType
    remaining_seconds: int
    tick_sound: bool


@dataclass(frozen=True, slots=True)
class SessionCompleted:
    completed: SessionType

    @property
    def was_work_session(self) -> bool:
        return self.completed is SessionType.WORK


ClockEvent = Union[RemainingTimeChanged, StatusChanged, Ticked, SessionCompleted]
Listener = Callable[[ClockEvent], None]


class Ticker(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...


TickerFactory = Callable[[Callable[[], None]], Ticker]


class IntervalTicker:
    """Calls ``callback`` once per interval on a daemon thread."""

    def __init__(self, callback: Callable[[], None], interval: float = 1.0) -> None:
        self._callback = callback
        self._interval = interval
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None

    def start(self) -> None:
        with self._lock:
            if self._thread and self._thread.is_alive():
                return
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run, args=(stop_event,), name="session-ticker", daemon=True
            )
            self._thread = thread
            self._stop_event = stop_event
            thread.start()
            logger.debug("Ticker thread started.")

    def stop(self) -> None:
        with self._lock:
            if not self._stop_event:
                return
            self._stop_event.set()
            self._thread = None
            self._stop_event = None
        logger.debug("Ticker thread stopped.")

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Tick callback failed.")


def format_time(seconds: int) -> str:
    mins, secs = divmod(max(seconds, 0), 60)
    return f"{mins:02d}:{secs:02d}"


class SessionClock:
    """Counts down the current session and alternates work and break."""

    def __init__(
        self,
        work_minutes: int = DEFAULT_WORK_MINUTES,
        break_minutes: int = DEFAULT_BREAK_MINUTES,
        tick_sound_enabled: bool = False,
        *,
        ticker_factory: TickerFactory = IntervalTicker,
    ) -> None:
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []
        self._ticker_factory = ticker_factory
        self._ticker: Optional[Ticker] = None
        self._run_id = 0
        self._running = False
        self.session_type = SessionType.WORK
        self.work_duration_seconds = DEFAULT_WORK_MINUTES * 60
        self.break_duration_seconds = DEFAULT_BREAK_MINUTES * 60
        self.tick_sound_enabled = False
        self.remaining_seconds = 0
        self.load_settings(work_minutes, break_minutes, tick_sound_enabled)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def time_text(self) -> str:
        return format_time(self.remaining_seconds)

    def duration_of(self, session_type: SessionType) -> int:
        if session_type is SessionType.WORK:
            return self.work_duration_seconds
        return self.break_duration_seconds

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for clock events; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def load_settings(
        self, work_minutes: int, break_minutes: int, tick_sound_enabled: bool
    ) -> None:
        with self._lock:
            self.work_duration_seconds = (
                positive_minutes(work_minutes, DEFAULT_WORK_MINUTES) * 60
            )
            self.break_duration_seconds = (
                positive_minutes(break_minutes, DEFAULT_BREAK_MINUTES) * 60
            )
            self.tick_sound_enabled = bool(tick_sound_enabled)
            self.remaining_seconds = self.duration_of(self.session_type)

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._run_id += 1
            logger.info("Started %s session at %s", self.session_type.value, self.time_text)
            # Ticks carrying an older run id are dropped in _scheduled_tick.
            self._ticker = self._ticker_factory(partial(self._scheduled_tick, self._run_id))
            self._ticker.start()

    def pause(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._running = False
            ticker, self._ticker = self._ticker, None
            if ticker is not None:
                ticker.stop()
            logger.info("Paused at %s", self.time_text)

    def reset(self) -> None:
        with self._lock:
            self.pause()
            self.remaining_seconds = self.duration_of(self.session_type)
            self._emit(RemainingTimeChanged(self.time_text))

    def tick(self) -> None:
        with self._lock:
            self.remaining_seconds = max(self.remaining_seconds - 1, 0)
            time_text = self.time_text
            current = self.session_type
            self._emit(RemainingTimeChanged(time_text))
            self._emit(StatusChanged(time_text, current))
            self._emit(
                Ticked(
                    session_type=current,
                    remaining_seconds=self.remaining_seconds,
                    tick_sound=self.tick_sound_enabled and current is SessionType.WORK,
                )
            )

            if self.remaining_seconds == 0:
                self.pause()
                logger.info("%s session complete.", current.value.capitalize())
                self._emit(SessionCompleted(current))
                self.session_type = current.toggled()
                self.remaining_seconds = self.duration_of(self.session_type)
                self._emit(StatusChanged(self.time_text, self.session_type))

    def close(self) -> None:
        with self._lock:
            self.pause()
            self._listeners.clear()

    def _scheduled_tick(self, run_id: int) -> None:
        with self._lock:
            if not self._running or run_id != self._run_id:
                return
            self.tick()

    def _emit(self, event: ClockEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Clock listener failed handling %s", type(event).__name__)

    def __enter__(self) -> "SessionClock":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
