"""Append-only CSV log of activity samples."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Optional

from .models import ActivityRecord

logger = logging.getLogger(__name__)

HEADER = "timestamp,app_name,window_title,session_type"


class ActivityLogError(Exception):
    """Raised when a record cannot be appended to the log."""


def parse_csv_line(line: str) -> list[str]:
    """Split a log line on unquoted commas.

    Every double quote toggles quoted mode and is dropped. Doubled quotes are
    not treated as an escape, so existing logs keep parsing the same way.
    """
    parts: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _single_line(value: str) -> str:
    # Anything str.splitlines() breaks on must not reach the file.
    return " ".join(value.splitlines())


def format_record(record: ActivityRecord) -> str:
    app_name = _single_line(record.app_name)
    window_title = _single_line(record.window_title)
    return (
        f'{record.timestamp_text},"{app_name}","{window_title}",'
        f"{record.session_type.value}"
    )


class ActivityLogStore:
    """Owns the log file and the handle used to append to it."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._handle: Optional[IO[str]] = None

    def ensure_initialized(self) -> None:
        """Create the log with its header unless it already exists."""
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            # "x" never clobbers a file created between the check and the open.
            with self.path.open("x", encoding="utf-8", newline="") as handle:
                handle.write(HEADER + "\n")
        except FileExistsError:
            return
        logger.info("Created activity log at %s", self.path)

    def append(self, record: ActivityRecord) -> None:
        line = format_record(record) + "\n"
        try:
            handle = self._open_for_append()
            handle.write(line)
            handle.flush()
            os.fsync(handle.fileno())
        except OSError as exc:
            self._release()
            raise ActivityLogError(f"Failed to append to {self.path}") from exc

    def read_all(self) -> list[str]:
        """Return every line of the log, or nothing if it cannot be read."""
        try:
            content = self.path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            logger.debug("Activity log %s is not readable; treating as empty.", self.path)
            return []
        if not content:
            return []
        # Records end with "\n" only; other Unicode line boundaries are data.
        return content.removesuffix("\n").split("\n")

    def close(self) -> None:
        self._release()

    def _open_for_append(self) -> IO[str]:
        if self._handle is not None:
            return self._handle
        self.ensure_initialized()
        needs_newline = _ends_without_newline(self.path)
        handle = self.path.open("a", encoding="utf-8", newline="")
        if needs_newline:
            # A torn trailing line stays on its own line.
            handle.write("\n")
        self._handle = handle
        return handle

    def _release(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            try:
                handle.close()
            except OSError:
                logger.exception("Failed to close activity log %s", self.path)

    def __enter__(self) -> "ActivityLogStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _ends_without_newline(path: Path) -> bool:
    with path.open("rb") as handle:
        handle.seek(0, os.SEEK_END)
        if handle.tell() == 0:
            return False
        handle.seek(-1, os.SEEK_END)
        return handle.read(1) != b"\n"

