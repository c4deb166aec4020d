"""Per-application statistics computed from the activity log."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from .activity_log import ActivityLogStore, parse_csv_line
from .models import AppStat


def compute_stats(store: ActivityLogStore) -> list[AppStat]:
    """Re-scan the whole log and return sample shares by application."""
    lines = store.read_all()[1:]
    counts: defaultdict[str, int] = defaultdict(int)
    total = 0
    for line in lines:
        if not line:
            continue
        parts = parse_csv_line(line)
        if len(parts) < 2:
            continue
        counts[parts[1]] += 1
        total += 1

    stats = [
        AppStat(
            app_name=app_name,
            sample_count=count,
            percentage=count / total * 100 if total > 0 else 0.0,
        )
        for app_name, count in counts.items()
    ]
    # sorted() is stable, so ties keep first-seen order.
    return sorted(stats, key=lambda stat: stat.sample_count, reverse=True)


def format_stats_report(stats: Iterable[AppStat]) -> str:
    stats = list(stats)
    lines = ["Focus Time Stats", "================", ""]
    if not stats:
        lines.append("No data yet. Start a work session to begin tracking!")
        return "\n".join(lines)

    for stat in stats:
        mins, secs = divmod(stat.sample_count, 60)
        lines.append(
            f"{stat.app_name[:20]:<20} {mins:3d}:{secs:02d}  ({stat.percentage:5.1f}%)"
        )
    return "\n".join(lines)


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
