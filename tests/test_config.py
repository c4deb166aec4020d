"""Tests for settings handling."""

import json

from focus_timer.config import SettingsStore, TimerSettings


def test_defaults_when_file_missing(tmp_path):
    settings = SettingsStore(tmp_path / "settings.json").load()
    assert settings == TimerSettings(25, 5, False)
    assert settings.work_seconds == 1500
    assert settings.break_seconds == 300


def test_save_and_load(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    store = SettingsStore(path)

    store.save(TimerSettings(30, 10, True))

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "workDuration": 30,
        "breakDuration": 10,
        "enableTickSound": True,
    }
    assert store.load() == TimerSettings(30, 10, True)


def test_invalid_values_fall_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"workDuration": 0, "breakDuration": "soon", "enableTickSound": True}),
        encoding="utf-8",
    )

    assert SettingsStore(path).load() == TimerSettings(25, 5, True)


def test_corrupt_file_uses_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    assert SettingsStore(path).load() == TimerSettings()


def test_key_value_access(tmp_path):
    store = SettingsStore(tmp_path / "settings.json")
    assert store.get("workDuration") is None
    assert store.get("workDuration", 25) == 25

    store.set("workDuration", 45)
    store.set("enableTickSound", True)

    assert store.get("workDuration") == 45
    assert store.load().work_minutes == 45


def test_from_values_rejects_booleans_as_minutes():
    assert TimerSettings.from_values(True, False).work_minutes == 25
