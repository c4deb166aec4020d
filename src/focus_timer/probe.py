"""Probes reporting which application currently has the user's focus."""

from __future__ import annotations

import ctypes
import logging
import subprocess
import sys
from typing import Optional, Protocol

import psutil

logger = logging.getLogger(__name__)


class ForegroundProbe(Protocol):
    def get_active_window(self) -> tuple[Optional[str], Optional[str]]: ...


class NullProbe:
    """Reports no foreground target; used where no probe is available."""

    def get_active_window(self) -> tuple[Optional[str], Optional[str]]:
        return None, None


class WindowsActiveWindowProbe:
    """Retrieves the foreground window title and process name."""

    def __init__(self) -> None:
        self._user32 = ctypes.windll.user32  # type: ignore[attr-defined]

    def get_active_window(self) -> tuple[Optional[str], Optional[str]]:
        from ctypes import wintypes

        hwnd = self._user32.GetForegroundWindow()
        if not hwnd:
            return None, None

        length = self._user32.GetWindowTextLengthW(hwnd)
        buffer = ctypes.create_unicode_buffer(length + 1)
        self._user32.GetWindowTextW(hwnd, buffer, length + 1)
        window_title = buffer.value.strip() or None

        pid = wintypes.DWORD()
        self._user32.GetWindowThreadProcessId(hwnd, ctypes.byref(pid))
        process_name: Optional[str]
        try:
            if pid.value:
                process_name = psutil.Process(pid.value).name()
            else:
                process_name = None
        except (psutil.Error, ProcessLookupError):
            process_name = None

        return process_name, window_title


_MAC_SCRIPT = """
tell application "System Events"
    set frontProc to first application process whose frontmost is true
    set appName to name of frontProc
    set winTitle to ""
    try
        set winTitle to name of front window of frontProc
    end try
    return appName & linefeed & winTitle
end tell
"""


class MacActiveWindowProbe:
    """Asks System Events for the frontmost application and its front window."""

    def __init__(self, timeout: float = 2.0) -> None:
        self._timeout = timeout

    def get_active_window(self) -> tuple[Optional[str], Optional[str]]:
        try:
            result = subprocess.run(
                ["osascript", "-e", _MAC_SCRIPT],
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except (OSError, subprocess.SubprocessError):
            logger.debug("osascript query failed.", exc_info=True)
            return None, None
        if result.returncode != 0:
            return None, None

        app_name, _, window_title = result.stdout.rstrip("\n").partition("\n")
        return app_name.strip() or None, window_title.strip() or None


def default_probe() -> ForegroundProbe:
    if sys.platform == "win32":
        return WindowsActiveWindowProbe()
    if sys.platform == "darwin":
        return MacActiveWindowProbe()
    logger.warning("No foreground probe for %s; activity will not be sampled.", sys.platform)
    return NullProbe()
