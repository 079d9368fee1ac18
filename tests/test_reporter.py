"""Tests for log_report/reporter.py"""

import unittest
from datetime import datetime

from log_report.models import LogRecord
from log_report.reporter import (
    EmptyReportError,
    format_entry,
    format_timestamp,
    generate_report,
    group_by_user,
)

T1 = datetime(2024, 1, 1, 9, 0, 0)
T2 = datetime(2024, 1, 1, 10, 30, 0)
T3 = datetime(2024, 1, 2, 8, 15, 0)


def _record(username="alice", ts=T1, level="info", path="/api", referer=None, message="hello"):
    return LogRecord(
        timestamp=ts,
        username=username,
        log_level=level,
        request_path=path,
        referer=referer,
        message=message,
    )


class TestGroupByUser(unittest.TestCase):
    def test_same_user_grouped(self):
        older = _record(ts=T1, message="first")
        newer = _record(ts=T2, message="second")
        groups = group_by_user([older, newer])

        self.assertEqual(len(groups), 1)
        group = groups[0]
        self.assertEqual(group.username, "alice")
        self.assertEqual(group.first_activity, T1)
        self.assertEqual(group.last_activity, T2)
        self.assertEqual(group.action_count, 2)
        self.assertEqual(group.entries, (newer, older))

    def test_first_encounter_order(self):
        records = [_record("bob"), _record("alice"), _record("bob", ts=T2)]
        groups = group_by_user(records)
        self.assertEqual([g.username for g in groups], ["bob", "alice"])

    def test_missing_usernames_skipped(self):
        records = [_record(None), _record(""), _record("carol")]
        groups = group_by_user(records)
        self.assertEqual([g.username for g in groups], ["carol"])

    def test_exact_match_grouping(self):
        groups = group_by_user([_record("Admin"), _record("admin")])
        self.assertEqual(len(groups), 2)

    def test_ties_keep_input_order(self):
        a = _record(ts=T1, message="a")
        b = _record(ts=T1, message="b")
        self.assertEqual(group_by_user([a, b])[0].entries, (a, b))


class TestFormatting(unittest.TestCase):
    def test_timestamp_format(self):
        self.assertEqual(format_timestamp(datetime(2024, 1, 1, 9, 5, 7, 123)), "2024-01-01 09:05:07")

    def test_zero_timestamp_format(self):
        self.assertEqual(format_timestamp(datetime.min), "0001-01-01 00:00:00")

    def test_entry_with_absent_fields(self):
        record = LogRecord(timestamp=T1, username="alice")
        self.assertEqual(format_entry(record), "2024-01-01 09:00:00, , , , ")

    def test_entry_fields_in_order(self):
        record = _record(referer="http://ref", message="msg")
        self.assertEqual(format_entry(record), "2024-01-01 09:00:00, info, /api, http://ref, msg")


class TestGenerateReport(unittest.TestCase):
    def test_single_record_layout(self):
        report = generate_report([_record()])
        expected = (
            "\nStatistics:\n\n"
            "alice\n"
            "First activity: 2024-01-01 09:00:00\n"
            "Last activity: 2024-01-01 09:00:00\n"
            "Number of actions: 1\n"
            "\n"
            "\nActivities:\n\n"
            "alice\n"
            "2024-01-01 09:00:00, info, /api, , hello\n"
        )
        self.assertEqual(report.content, expected)
        self.assertEqual(report.newest_timestamp, T1)

    def test_activities_newest_first(self):
        report = generate_report([_record(ts=T1, message="early"), _record(ts=T2, message="late")])
        self.assertIn("Number of actions: 2", report.content)
        self.assertLess(report.content.index("late"), report.content.index("early"))

    def test_statistics_before_activities(self):
        report = generate_report([_record("bob"), _record("alice")])
        content = report.content
        stats, activities = content.split("Activities:")
        self.assertLess(stats.index("bob"), stats.index("alice"))
        self.assertLess(activities.index("bob"), activities.index("alice"))

    def test_user_less_record_counts_for_newest_only(self):
        report = generate_report([_record(ts=T1), _record(None, ts=T3, message="ghost")])
        self.assertNotIn("ghost", report.content)
        self.assertEqual(report.newest_timestamp, T3)

    def test_no_named_users(self):
        report = generate_report([_record(None, ts=T2)])
        self.assertEqual(report.content, "\nStatistics:\n\n\nActivities:\n\n")
        self.assertEqual(report.newest_timestamp, T2)

    def test_empty_input_raises(self):
        with self.assertRaises(EmptyReportError):
            generate_report([])

    def test_empty_report_error_is_value_error(self):
        self.assertTrue(issubclass(EmptyReportError, ValueError))


if __name__ == "__main__":
    unittest.main()
