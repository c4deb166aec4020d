"""Command-line interface for the focus timer."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Optional

import typer

from .activity_log import ActivityLogStore
from .clock import ClockEvent, SessionCompleted, StatusChanged, Ticked
from .config import SettingsStore, TimerSettings
from .notifications import completion_message
from .paths import get_activity_log_path, get_settings_path
from .probe import NullProbe, default_probe
from .server_runner import run_api
from .session import FocusSession
from .stats import compute_stats, format_duration, format_stats_report

app = typer.Typer(help="Pomodoro focus timer with per-application activity stats.")


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _console_listener(completed: threading.Event) -> Callable[[ClockEvent], None]:
    def listener(event: ClockEvent) -> None:
        if isinstance(event, StatusChanged):
            typer.echo(f"\r{event.session_type.label:<14} {event.time_text}", nl=False)
        elif isinstance(event, Ticked) and event.tick_sound:
            typer.echo("\a", nl=False)
        elif isinstance(event, SessionCompleted):
            message = completion_message(event.completed)
            typer.echo(f"\a\n{message.title} {message.body}")
            completed.set()

    return listener


@app.command()
def run(
    log_path: Optional[Path] = typer.Option(
        None,
        "--log",
        path_type=Path,
        help="Location of the activity CSV log.",
    ),
    sampling: bool = typer.Option(
        True,
        "--sampling/--no-sampling",
        help="Record the focused application during work sessions.",
    ),
) -> None:
    """Run the timer in the console until interrupted."""
    settings = SettingsStore(get_settings_path()).load()
    probe = default_probe() if sampling else NullProbe()
    completed = threading.Event()

    with FocusSession(log_path or get_activity_log_path(), settings, probe=probe) as session:
        session.clock.subscribe(_console_listener(completed))
        try:
            while True:
                completed.clear()
                session.clock.start()
                while not completed.wait(0.5):
                    pass
                typer.prompt(
                    f"Press Enter to start the {session.clock.session_type.label.lower()}",
                    default="",
                    show_default=False,
                )
        except (KeyboardInterrupt, typer.Abort):
            typer.echo("\nStopped.")


@app.command()
def stats(
    log_path: Optional[Path] = typer.Option(
        None,
        "--log",
        path_type=Path,
        help="Location of the activity CSV log.",
    ),
) -> None:
    """Print the time share of each application seen during work sessions."""
    with ActivityLogStore(log_path or get_activity_log_path()) as store:
        entries = compute_stats(store)
    typer.echo(format_stats_report(entries))
    if entries:
        total = sum(entry.sample_count for entry in entries)
        typer.echo()
        typer.echo(f"Total tracked: {format_duration(total)}")


@app.command()
def settings(
    work_minutes: Optional[int] = typer.Option(
        None, "--work", help="Focus duration in minutes."
    ),
    break_minutes: Optional[int] = typer.Option(
        None, "--break", help="Break duration in minutes."
    ),
    tick_sound: Optional[bool] = typer.Option(
        None, "--tick-sound/--no-tick-sound", help="Ring the bell on every work tick."
    ),
    settings_path: Optional[Path] = typer.Option(
        None, "--settings", path_type=Path, help="Location of the settings file."
    ),
) -> None:
    """Show or update the saved timer settings."""
    store = SettingsStore(settings_path or get_settings_path())
    current = store.load()

    if work_minutes is not None or break_minutes is not None or tick_sound is not None:
        for name, value in (("--work", work_minutes), ("--break", break_minutes)):
            if value is not None and value <= 0:
                raise typer.BadParameter("must be a positive number of minutes", param_hint=name)
        current = TimerSettings(
            work_minutes=work_minutes if work_minutes is not None else current.work_minutes,
            break_minutes=break_minutes if break_minutes is not None else current.break_minutes,
            tick_sound_enabled=(
                tick_sound if tick_sound is not None else current.tick_sound_enabled
            ),
        )
        store.save(current)
        typer.echo("Settings saved.")

    typer.echo(f"Focus duration: {current.work_minutes} min")
    typer.echo(f"Break duration: {current.break_minutes} min")
    typer.echo(f"Tick sound:     {'on' if current.tick_sound_enabled else 'off'}")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the API."),
    port: int = typer.Option(
        8766, "--port", min=1, max=65535, help="TCP port for the API."
    ),
    log_path: Optional[Path] = typer.Option(
        None, "--log", path_type=Path, help="Location of the activity CSV log."
    ),
) -> None:
    """Start the local API that drives the timer."""
    run_api(
        host=host,
        port=port,
        log_path=log_path or get_activity_log_path(),
    )
