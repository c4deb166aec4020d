"""Text shown to the user when a session finishes."""

from __future__ import annotations

from dataclasses import dataclass

from .models import SessionType


@dataclass(frozen=True, slots=True)
class Notification:
    title: str
    body: str


def completion_message(completed: SessionType) -> Notification:
    if completed is SessionType.WORK:
        return Notification("Focus Time Complete!", "Great work! Time for a break.")
    return Notification("Break Complete!", "Ready to focus again?")
