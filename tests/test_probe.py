"""Tests for foreground probes that do not need a real desktop."""

import subprocess

from focus_timer import probe
from focus_timer.probe import MacActiveWindowProbe, NullProbe, default_probe


def test_null_probe_reports_nothing():
    assert NullProbe().get_active_window() == (None, None)


def test_default_probe_on_unsupported_platform(monkeypatch):
    monkeypatch.setattr(probe.sys, "platform", "linux")
    assert isinstance(default_probe(), NullProbe)


def test_mac_probe_parses_app_and_title(monkeypatch):
    def fake_run(*args, **kwargs):
        return subprocess.CompletedProcess(args, 0, stdout="Safari\nApple, Inc.\n", stderr="")

    monkeypatch.setattr(probe.subprocess, "run", fake_run)

    assert MacActiveWindowProbe().get_active_window() == ("Safari", "Apple, Inc.")


def test_mac_probe_without_window(monkeypatch):
    def fake_run(*args, **kwargs):
        return subprocess.CompletedProcess(args, 0, stdout="Finder\n\n", stderr="")

    monkeypatch.setattr(probe.subprocess, "run", fake_run)

    assert MacActiveWindowProbe().get_active_window() == ("Finder", None)


def test_mac_probe_failure(monkeypatch):
    def fake_run(*args, **kwargs):
        raise subprocess.TimeoutExpired("osascript", 2.0)

    monkeypatch.setattr(probe.subprocess, "run", fake_run)

    assert MacActiveWindowProbe().get_active_window() == (None, None)
