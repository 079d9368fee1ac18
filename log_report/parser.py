"""Entry parser — turn one key=value log line into a LogRecord.

Parsing is best effort: a field that cannot be extracted leaves its default
on the record and adds a ParseError to ``diagnostics``. ``parse_line`` always
returns a record.
"""

import logging
from functools import partial
from typing import Callable, Iterable

from log_report.extract import (
    extract_int,
    extract_message,
    extract_optional_int,
    extract_optional_long,
    extract_string,
    extract_timestamp,
)
from log_report.filters import filter_lines
from log_report.models import LogRecord, ParseError

logger = logging.getLogger(__name__)

# (record attribute, diagnostic name, extractor)
FIELDS: list[tuple[str, str, Callable[[str], tuple]]] = [
    ("timestamp", "Timestamp", extract_timestamp),
    ("user_id", "UserId", partial(extract_int, key="userId")),
    ("org_id", "OrgId", partial(extract_int, key="orgId")),
    ("username", "Username", partial(extract_string, key="uname")),
    ("log_level", "LogLevel", partial(extract_string, key="level")),
    ("message", "Message", extract_message),
    ("request_method", "RequestMethod", partial(extract_string, key="method")),
    ("request_path", "RequestPath", partial(extract_string, key="path")),
    ("status", "Status", partial(extract_optional_int, key="status")),
    ("remote_address", "RemoteAddress", partial(extract_string, key="remote_addr")),
    ("time_ms", "TimeMs", partial(extract_optional_long, key="time_ms")),
    ("size", "Size", partial(extract_optional_int, key="size")),
    ("referer", "Referer", partial(extract_string, key="referer")),
]


def parse_line(line: str) -> LogRecord:
    values = {}
    errors: list[ParseError] = []

    try:
        for attr, name, extractor in FIELDS:
            value, ok = extractor(line)
            if ok:
                values[attr] = value
            else:
                errors.append(ParseError(name, "missing or malformed value"))
    except Exception as e:
        logger.debug("Unexpected failure parsing line %r: %s", line, e)
        errors.append(ParseError(None, str(e)))

    return LogRecord(**values, diagnostics=tuple(errors))


def parse_lines(lines: Iterable[str]) -> list[LogRecord]:
    """Parse every line, one record per line, order preserved."""
    return [parse_line(line) for line in lines]


def parse_logs(lines: Iterable[str]) -> list[LogRecord]:
    """Filter out lines without a username, then parse the rest."""
    records = parse_lines(filter_lines(lines))
    with_errors = sum(1 for r in records if r.diagnostics)
    logger.info("Parsed %d entries (%d with parsing errors)", len(records), with_errors)
    return records
