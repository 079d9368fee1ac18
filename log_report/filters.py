"""Line filter — keep only lines that identify a user."""

import re
from typing import Iterable

USERNAME_MARKER = re.compile(r"uname=\w")


def is_relevant(line: str) -> bool:
    """True if the line carries ``uname=`` followed by a word character."""
    return USERNAME_MARKER.search(line) is not None


def filter_lines(lines: Iterable[str]) -> list[str]:
    """Relevant lines, in input order."""
    return [line for line in lines if is_relevant(line)]
