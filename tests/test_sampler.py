"""Tests for work-session activity sampling."""

from datetime import datetime, timezone

import pytest

from conftest import FakeProbe
from focus_timer.activity_log import ActivityLogError, ActivityLogStore
from focus_timer.clock import SessionClock, StatusChanged
from focus_timer.models import SessionType
from focus_timer.sampler import ActivitySampler

NOW = datetime(2024, 5, 6, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(log_path):
    store = ActivityLogStore(log_path)
    store.ensure_initialized()
    yield store
    store.close()


def _sampler(store, probe):
    return ActivitySampler(store, probe, clock=lambda: NOW)


def test_break_sessions_never_append(store):
    probe = FakeProbe()
    sampler = _sampler(store, probe)

    for _ in range(50):
        assert sampler.sample_if_work_session(SessionType.BREAK) is None

    assert probe.calls == 0
    assert len(store.read_all()) == 1


def test_work_sample_is_written(store):
    sampler = _sampler(store, FakeProbe(("Safari", "Inbox")))

    record = sampler.sample_if_work_session(SessionType.WORK)

    assert record is not None
    assert record.timestamp == NOW
    assert record.session_type is SessionType.WORK
    assert store.read_all()[1:] == ['2024-05-06T09:00:00Z,"Safari","Inbox",work']


def test_missing_app_skips_sample(store):
    sampler = _sampler(store, FakeProbe((None, "Some title")))

    assert sampler.sample_if_work_session(SessionType.WORK) is None
    assert len(store.read_all()) == 1


def test_missing_title_is_written_empty(store):
    sampler = _sampler(store, FakeProbe(("Terminal", None)))

    record = sampler.sample_if_work_session(SessionType.WORK)

    assert record.window_title == ""
    assert store.read_all()[1] == '2024-05-06T09:00:00Z,"Terminal","",work'


def test_blank_app_name_becomes_unknown(store):
    sampler = _sampler(store, FakeProbe(("  ", "Window")))

    record = sampler.sample_if_work_session(SessionType.WORK)

    assert record.app_name == "Unknown"


def test_probe_failure_skips_sample(store):
    class BrokenProbe:
        def get_active_window(self):
            raise OSError("no display")

    sampler = _sampler(store, BrokenProbe())

    assert sampler.sample_if_work_session(SessionType.WORK) is None
    assert len(store.read_all()) == 1


class FailingStore:
    def append(self, record):
        raise ActivityLogError("disk full")


def test_append_failure_is_absorbed():
    sampler = _sampler(FailingStore(), FakeProbe())

    assert sampler.sample_if_work_session(SessionType.WORK) is None


def test_clock_ticks_still_emit_when_append_fails(ticker_factory):
    clock = SessionClock(1, 1, ticker_factory=ticker_factory)
    statuses = []
    clock.subscribe(lambda event: statuses.append(event) if isinstance(event, StatusChanged) else None)
    _sampler(FailingStore(), FakeProbe()).attach(clock)

    clock.tick()

    assert statuses == [StatusChanged("00:59", SessionType.WORK)]


def test_one_record_per_work_tick(store, ticker_factory):
    clock = SessionClock(1, 1, ticker_factory=ticker_factory)
    _sampler(store, FakeProbe(("Safari", "Inbox"))).attach(clock)

    for _ in range(120):
        clock.tick()

    assert clock.session_type is SessionType.WORK
    assert len(store.read_all()) == 1 + 60
