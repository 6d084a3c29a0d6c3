"""Unit tests for run reporting."""

from __future__ import annotations

import csv
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from laakhay.sync.core import SyncVariant
from laakhay.sync.models import (
    ChunkRecord,
    DispatchOutcome,
    FailureRecord,
    RunStatistics,
    TimeWindow,
)
from laakhay.sync.reporting import (
    ReportWriter,
    format_execution_time,
    group_failures,
    print_summary,
    to_12_hour,
)

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def account_stats() -> RunStatistics:
    return RunStatistics(
        start_time=NOW,
        total_processed=4,
        successful=2,
        failed=2,
        failures=[
            FailureRecord(identifier=11, group_key="alpha", error="HTTP 400: Bad Request"),
            FailureRecord(identifier=12, group_key="beta", error="HTTP 400: Bad Request"),
        ],
        end_time=NOW + timedelta(seconds=65),
    )


def interval_stats() -> RunStatistics:
    tz = ZoneInfo("America/Chicago")
    start = datetime(2024, 1, 1, 6, tzinfo=UTC)
    first = TimeWindow.from_bounds(start, start + timedelta(hours=2), tz)
    second = TimeWindow.from_bounds(start + timedelta(hours=12), start + timedelta(hours=14), tz)
    ok = DispatchOutcome.succeeded(first.to_request().to_wire(), {"message": "synced", "count": 3})
    failed = DispatchOutcome.failed(second.to_request().to_wire(), "HTTP 500: Server Error")
    return RunStatistics(
        start_time=NOW,
        total_processed=2,
        successful=1,
        failed=1,
        failures=[FailureRecord(identifier=second.label, error="HTTP 500: Server Error")],
        chunks=[
            ChunkRecord(chunk_index=0, label=first.label, units=1, outcome=ok),
            ChunkRecord(chunk_index=1, label=second.label, units=1, outcome=failed),
        ],
        end_time=NOW,
    )


@pytest.mark.parametrize(
    "ms,expected",
    [
        (0, "0ms"),
        (850, "850ms"),
        (1000, "1s"),
        (1500, "1.5s"),
        (59999, "59.9s"),
        (60000, "1m"),
        (65000, "1m 5s"),
        (3600000, "1h"),
        (8100000, "2h 15m"),
    ],
)
def test_format_execution_time(ms, expected):
    """Test duration rendering thresholds."""
    assert format_execution_time(ms) == expected


@pytest.mark.parametrize(
    "wall_time,expected",
    [
        ("2024-01-01 00:00:00", "01/01/2024 12:00:00 AM"),
        ("2024-01-01 00:30:15", "01/01/2024 12:30:15 AM"),
        ("2024-01-01 09:05:00", "01/01/2024 9:05:00 AM"),
        ("2024-01-01 12:00:00", "01/01/2024 12:00:00 PM"),
        ("2024-01-01 13:45:09", "01/01/2024 1:45:09 PM"),
        ("2024-12-31 23:59:59", "12/31/2024 11:59:59 PM"),
    ],
)
def test_to_12_hour(wall_time, expected):
    """Test standard 12-hour conversion, noon and midnight included."""
    assert to_12_hour(wall_time) == expected


def test_group_failures_keeps_first_seen_order():
    """Test failures are grouped by error message."""
    failures = [
        FailureRecord(identifier=1, group_key="a", error="e2"),
        FailureRecord(identifier=2, group_key="a", error="e1"),
        FailureRecord(identifier=3, group_key="b", error="e2"),
    ]
    grouped = group_failures(failures)
    assert list(grouped) == ["e2", "e1"]
    assert [r.identifier for r in grouped["e2"]] == [1, 3]


class TestAccountReports:
    """Test account run reports."""

    def test_text_report(self):
        """Test the text report lists totals and failures by error."""
        report = ReportWriter(clock=lambda: NOW).account_report(account_stats())

        assert "- Total accounts processed: 4" in report
        assert "- Success rate: 50.00%" in report
        assert "- Execution time: 1m 5s" in report
        assert "Error: HTTP 400: Bad Request" in report
        assert "Affected accounts (2):" in report
        assert "  - Account ID: 12, Impact Group: beta" in report

    def test_text_report_without_failures(self):
        """Test the all-clear line."""
        stats = RunStatistics(start_time=NOW, total_processed=3, successful=3)
        report = ReportWriter(clock=lambda: NOW).account_report(stats)
        assert "All accounts processed successfully!" in report
        assert "FAILED ACCOUNTS" not in report

    def test_failed_accounts_csv_is_replayable(self):
        """Test the failure CSV uses the input format."""
        content = ReportWriter.failed_accounts_csv(account_stats().failures)
        rows = list(csv.DictReader(content.splitlines()))
        assert rows == [
            {"ACCOUNT_ID_INT": "11", "IMPACT_GROUP_SLUG": "alpha"},
            {"ACCOUNT_ID_INT": "12", "IMPACT_GROUP_SLUG": "beta"},
        ]

    def test_failed_accounts_csv_header_only(self):
        """Test an empty ledger still writes the header."""
        assert ReportWriter.failed_accounts_csv([]) == "ACCOUNT_ID_INT,IMPACT_GROUP_SLUG\n"

    def test_save(self, tmp_path):
        """Test both files are written with a shared timestamp."""
        writer = ReportWriter(tmp_path, clock=lambda: NOW)
        report_path, csv_path = writer.save_account_reports(account_stats())

        assert report_path.name == "report_2024-01-01T12-00-00-000+00-00.txt"
        assert csv_path.name == "failed_accounts_2024-01-01T12-00-00-000+00-00.csv"
        assert "Impact Groups Processing Report" in report_path.read_text()
        assert csv_path.read_text().startswith("ACCOUNT_ID_INT,IMPACT_GROUP_SLUG")

    def test_write_failure_is_raised(self, tmp_path):
        """Test an unwritable destination raises after logging."""
        writer = ReportWriter(tmp_path / "missing" / "dir", clock=lambda: NOW)
        with pytest.raises(OSError):
            writer.save_account_reports(account_stats())


class TestIntervalReport:
    """Test interval run reports."""

    def test_timesheet_and_details(self):
        """Test the timesheet uses 12-hour times and details carry bodies and errors."""
        report = ReportWriter(clock=lambda: NOW).interval_report(interval_stats(), "r.txt")

        assert "Report File: r.txt" in report
        assert "Success Rate: 50.0%" in report
        assert "1. 01/01/2024 12:00:00 AM - 01/01/2024 2:00:00 AM OK" in report
        assert "2. 01/01/2024 12:00:00 PM - 01/01/2024 2:00:00 PM FAILED" in report
        assert "CALL #2" in report
        assert '"message": "synced"' in report
        assert "  HTTP 500: Server Error" in report
        assert report.rstrip().endswith("=" * 80)

    def test_save(self, tmp_path):
        """Test the report file name."""
        path = ReportWriter(tmp_path, clock=lambda: NOW).save_interval_report(interval_stats())
        assert path.name == "sync-report-2024-01-01T12-00-00-000+00-00.txt"
        assert f"Report File: {path.name}" in path.read_text()


def test_print_summary(capsys):
    """Test the console summary."""
    print_summary(account_stats(), SyncVariant.ACCOUNTS)
    out = capsys.readouterr().out
    assert "PROCESSING COMPLETE" in out
    assert "Total accounts processed: 4" in out
    assert "Success rate: 50.00%" in out
    assert "2 accounts failed processing." in out

    clean = RunStatistics(start_time=NOW, total_processed=2, successful=2)
    print_summary(clean, SyncVariant.INTERVALS)
    assert "All intervals processed successfully!" in capsys.readouterr().out
