"""Report aggregation — per-user statistics and activity listings."""

from datetime import datetime
from typing import Sequence

from log_report.models import LogRecord, Report, UserActivity


class EmptyReportError(ValueError):
    """Raised when a report is requested for zero records."""


def format_timestamp(ts: datetime) -> str:
    return ts.isoformat(sep=" ", timespec="seconds")


def _text(value) -> str:
    return "" if value is None else str(value)


def group_by_user(records: Sequence[LogRecord]) -> list[UserActivity]:
    """Group records by username, in order of first appearance.

    Records without a username are skipped.
    """
    groups: dict[str, list[LogRecord]] = {}
    for record in records:
        if not record.username:
            continue
        groups.setdefault(record.username, []).append(record)

    activities = []
    for username, entries in groups.items():
        timestamps = [e.timestamp for e in entries]
        activities.append(UserActivity(
            username=username,
            first_activity=min(timestamps),
            last_activity=max(timestamps),
            action_count=len(entries),
            entries=tuple(sorted(entries, key=lambda e: e.timestamp, reverse=True)),
        ))
    return activities


def format_statistics(activities: Sequence[UserActivity]) -> list[str]:
    lines = ["", "Statistics:", ""]
    for activity in activities:
        lines.append(activity.username)
        lines.append(f"First activity: {format_timestamp(activity.first_activity)}")
        lines.append(f"Last activity: {format_timestamp(activity.last_activity)}")
        lines.append(f"Number of actions: {activity.action_count}")
        lines.append("")
    return lines


def format_entry(record: LogRecord) -> str:
    """One activity line: timestamp, level, path, referer, message."""
    return ", ".join([
        format_timestamp(record.timestamp),
        _text(record.log_level),
        _text(record.request_path),
        _text(record.referer),
        _text(record.message),
    ])


def format_activities(activities: Sequence[UserActivity]) -> list[str]:
    lines = ["", "Activities:", ""]
    for activity in activities:
        lines.append(activity.username)
        lines.extend(format_entry(e) for e in activity.entries)
    return lines


def newest_timestamp(records: Sequence[LogRecord]) -> datetime:
    """Latest timestamp over all records, with or without a username."""
    if not records:
        raise EmptyReportError("Cannot build a report from zero log entries")
    return max(r.timestamp for r in records)


def generate_report(records: Sequence[LogRecord]) -> Report:
    newest = newest_timestamp(records)
    activities = group_by_user(records)
    lines = format_statistics(activities) + format_activities(activities)
    return Report(content="\n".join(lines) + "\n", newest_timestamp=newest)
