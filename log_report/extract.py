"""Field extractors for key=value log lines.

Every extractor returns a ``(value, ok)`` pair and never raises. A key that is
missing and a key whose value is malformed both come back with ``ok=False``.
"""

import re
from datetime import datetime, timezone
from functools import lru_cache

from dateutil import parser as date_parser

INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1

# Key must not be the tail of a longer identifier ("t=" vs "limit=")
_KEY_PREFIX = r"(?<![\w.])"

TIMESTAMP_PATTERN = re.compile(_KEY_PREFIX + r"t=(?P<value>[^ ]+)")
MESSAGE_PATTERN = re.compile(_KEY_PREFIX + r'msg="(?P<value>[^"]+)"')

# Timestamp token must start with a full year-month-day date
FULL_DATE_PATTERN = re.compile(r"\d{4}[-/.]\d{1,2}[-/.]\d{1,2}")


@lru_cache(maxsize=None)
def _string_pattern(key: str) -> re.Pattern:
    k = re.escape(key)
    return re.compile(_KEY_PREFIX + k + r'=(?:"(?P<quoted>[^"]+)"|(?P<bare>[^ "][^ ]*))')


@lru_cache(maxsize=None)
def _int_pattern(key: str) -> re.Pattern:
    return re.compile(_KEY_PREFIX + re.escape(key) + r"=(?P<value>-?\d+)")


def _match_int(line: str, key: str, low: int, high: int) -> int | None:
    match = _int_pattern(key).search(line)
    if not match:
        return None
    value = int(match.group("value"))
    if not low <= value <= high:
        return None
    return value


def extract_string(line: str, key: str) -> tuple[str | None, bool]:
    """Quoted (``key="a b"``) or bare (``key=ab``) value."""
    match = _string_pattern(key).search(line)
    if not match:
        return None, False
    quoted = match.group("quoted")
    if quoted is not None:
        return quoted, True
    return match.group("bare"), True


def extract_int(line: str, key: str) -> tuple[int, bool]:
    """Required 32-bit integer; 0 when missing or out of range."""
    value = _match_int(line, key, INT32_MIN, INT32_MAX)
    if value is None:
        return 0, False
    return value, True


def extract_optional_int(line: str, key: str) -> tuple[int | None, bool]:
    value = _match_int(line, key, INT32_MIN, INT32_MAX)
    return value, value is not None


def extract_optional_long(line: str, key: str) -> tuple[int | None, bool]:
    value = _match_int(line, key, INT64_MIN, INT64_MAX)
    return value, value is not None


def extract_timestamp(line: str) -> tuple[datetime, bool]:
    """Parse the ``t=`` token. Aware values are normalised to naive UTC.

    ISO 8601 is tried first; other layouts need an explicit full date so
    that nothing is filled in from the current day.
    """
    match = TIMESTAMP_PATTERN.search(line)
    if not match:
        return datetime.min, False
    token = match.group("value")
    if not FULL_DATE_PATTERN.match(token):
        return datetime.min, False
    try:
        try:
            timestamp = date_parser.isoparse(token)
        except ValueError:
            timestamp = date_parser.parse(token)
        if timestamp.tzinfo is not None:
            timestamp = timestamp.astimezone(timezone.utc).replace(tzinfo=None)
    except (ValueError, OverflowError):
        return datetime.min, False
    return timestamp, True


def extract_message(line: str) -> tuple[str | None, bool]:
    match = MESSAGE_PATTERN.search(line)
    if not match:
        return None, False
    return match.group("value"), True
