"""log-report — build a per-user activity report from Grafana key=value logs."""

import logging
import sys
from argparse import ArgumentParser

from log_report.config import describe_config, load_config, load_yaml_config
from log_report.parser import parse_logs
from log_report.persistence import save_report
from log_report.reader import folder_contents, read_logs
from log_report.reporter import EmptyReportError, generate_report

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [LOG-REPORT] %(levelname)s %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="log-report",
        description="Summarize per-user activity from key=value log files.",
    )
    parser.add_argument(
        "--config",
        default="config.yml",
        help="Path to YAML settings file (default: config.yml)",
    )
    parser.add_argument(
        "--log-folder",
        dest="log_folder",
        help="Folder containing the log files to read",
    )
    parser.add_argument(
        "--report-folder",
        dest="report_folder",
        help="Folder the report file is written to",
    )
    parser.add_argument(
        "--format",
        dest="report_filename_format",
        help="strftime pattern for the report file name",
    )
    parser.add_argument(
        "--no-display",
        dest="display_results",
        action="store_const",
        const=False,
        help="Do not print the report to stdout",
    )
    parser.add_argument(
        "--wait",
        dest="close_when_finished",
        action="store_const",
        const=False,
        help="Wait for Enter before exiting",
    )
    return parser


def _log_folder_contents(label: str, folder: str):
    names = folder_contents(folder)
    if names is None:
        logger.info("%s folder %s not found", label, folder)
    elif not names:
        logger.info("%s folder %s is empty", label, folder)
    else:
        logger.info("%s folder %s: %s", label, folder, ", ".join(names))


def run(args) -> int:
    """Read, parse, report, save. Returns the process exit code."""
    config = load_config(args, load_yaml_config(args.config))
    for line in describe_config(config).splitlines():
        logger.info(line)

    _log_folder_contents("Log", config.log_folder)
    _log_folder_contents("Report", config.report_folder)

    try:
        lines = read_logs(config.log_folder)
    except OSError as e:
        logger.error("%s", e)
        return 1

    records = parse_logs(lines)

    try:
        report = generate_report(records)
    except EmptyReportError as e:
        logger.error("%s (no lines with a username in %s)", e, config.log_folder)
        return 1

    if config.display_results:
        print(report.content)

    try:
        save_report(report, config)
    except OSError as e:
        logger.error("Could not save report to %s: %s", config.report_folder, e)
        return 1

    if not config.close_when_finished:
        try:
            input("Press Enter to exit...")
        except EOFError:
            pass
    return 0


def main():
    parser = build_parser()
    args = parser.parse_args()
    sys.exit(run(args))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
