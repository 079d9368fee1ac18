"""Parsed log record, per-user activity group and report models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ParseError:
    field: str | None   # None for a line-level failure
    reason: str = ""

    def __str__(self) -> str:
        if self.field is None:
            return f"General parsing error: {self.reason}"
        return f"Failed to parse {self.field}."


@dataclass(frozen=True)
class LogRecord:
    timestamp: datetime = datetime.min
    user_id: int = 0
    org_id: int = 0
    username: str | None = None
    log_level: str | None = None
    message: str | None = None
    request_method: str | None = None
    request_path: str | None = None
    status: int | None = None
    remote_address: str | None = None
    time_ms: int | None = None
    size: int | None = None
    referer: str | None = None
    diagnostics: tuple[ParseError, ...] = field(default_factory=tuple)

    @property
    def parsing_errors(self) -> str:
        """Diagnostics as newline-terminated lines, empty when clean."""
        return "".join(f"{d}\n" for d in self.diagnostics)


@dataclass(frozen=True)
class UserActivity:
    username: str
    first_activity: datetime
    last_activity: datetime
    action_count: int
    entries: tuple[LogRecord, ...]  # newest first


@dataclass(frozen=True)
class Report:
    content: str
    newest_timestamp: datetime
