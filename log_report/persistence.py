"""Report persistence — derive a safe file name and write the report."""

import logging
import os
import re
import time
from datetime import datetime

from log_report.config import Config
from log_report.models import Report

logger = logging.getLogger(__name__)

REPORT_SUFFIX = "_report.txt"

# Disallowed in file names on Windows; a superset of what POSIX rejects
INVALID_FILENAME_CHARS = re.compile(r'[<>"|?*\x00-\x1f]')


def clean_filename(filename: str) -> str:
    filename = filename.replace(":", "-")
    filename = filename.replace("/", "-").replace("\\", "-")
    filename = INVALID_FILENAME_CHARS.sub("", filename)
    return filename.strip()


def report_filename(report: Report, filename_format: str) -> str:
    """e.g. ``2024-01-01 12-30-00_report.txt`` for ``%Y/%m/%d %H:%M:%S``."""
    stamp = report.newest_timestamp.strftime(filename_format)
    return clean_filename(stamp + REPORT_SUFFIX)


def save_report(report: Report, config: Config) -> str | None:
    """Write the report into ``config.report_folder``.

    Returns the written path, or None when the report has no usable timestamp.
    """
    logger.info("Saving report to file...")

    if report.newest_timestamp == datetime.min:
        logger.error("Newest timestamp is not set, report not saved")
        return None

    filename = report_filename(report, config.report_filename_format)
    path = os.path.join(config.report_folder, filename)

    start = time.perf_counter()
    os.makedirs(config.report_folder, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(report.content)
    elapsed_ms = (time.perf_counter() - start) * 1000

    logger.info("Report saved as: %s in %.2f ms", path, elapsed_ms)
    return path
