"""Log folder reading — enumerate files and load every line into memory."""

import logging
import os
import time
from typing import Generator

logger = logging.getLogger(__name__)


def list_log_files(folder: str) -> list[str]:
    """Regular files directly inside *folder*, sorted by name.

    Raises FileNotFoundError if the folder is not set or does not exist.
    """
    if not folder or not os.path.isdir(folder):
        raise FileNotFoundError(f"Log folder does not exist: {folder!r}")
    return sorted(
        os.path.join(folder, name)
        for name in os.listdir(folder)
        if os.path.isfile(os.path.join(folder, name))
    )


def read_lines(filepath: str) -> Generator[str, None, None]:
    """Yield each line of a file without its line terminator."""
    with open(filepath, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            yield line.rstrip("\r\n")


def read_logs(folder: str) -> list[str]:
    """All lines from all files in *folder*, file by file."""
    logger.info("Starting to read logs from %s", folder)
    paths = list_log_files(folder)

    all_lines: list[str] = []
    start = time.perf_counter()
    try:
        for path in paths:
            logger.info(" > %s", path)
            try:
                all_lines.extend(read_lines(path))
            except OSError as e:
                raise OSError(f"Error reading file {path}: {e}") from e
    finally:
        logger.info("Finished reading logs. Number of lines read: %d. Time taken: %.3f seconds.",
                    len(all_lines), time.perf_counter() - start)

    return all_lines


def folder_contents(folder: str) -> list[str] | None:
    """Names of files with an extension in *folder*, or None if it is missing."""
    if not os.path.isdir(folder):
        return None
    return sorted(
        name for name in os.listdir(folder)
        if os.path.isfile(os.path.join(folder, name)) and os.path.splitext(name)[1]
    )
