"""Run reports rendered from RunStatistics.

The reporter only consumes the aggregator's final snapshot. It writes a
persisted text report per run (plus a replayable CSV of failed accounts for
account runs) and prints a console summary.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from ..core.enums import SyncVariant
from ..io.csv_reader import ACCOUNT_ID_COLUMN, GROUP_KEY_COLUMN
from ..models import FailureRecord, RunStatistics
from ..models.window import WALL_TIME_FORMAT

logger = logging.getLogger(__name__)

RULE = "=" * 50
WIDE_RULE = "=" * 80


def _utcnow() -> datetime:
    return datetime.now(UTC)


def format_execution_time(execution_time_ms: int) -> str:
    """Render a duration as ``850ms``, ``12.3s``, ``4m 5s`` or ``2h 15m``."""
    if execution_time_ms < 1000:
        return f"{execution_time_ms}ms"

    seconds, remaining_ms = divmod(execution_time_ms, 1000)
    if seconds < 60:
        return f"{seconds}.{remaining_ms // 100}s" if remaining_ms > 0 else f"{seconds}s"

    minutes, remaining_seconds = divmod(seconds, 60)
    if minutes < 60:
        return f"{minutes}m {remaining_seconds}s" if remaining_seconds > 0 else f"{minutes}m"

    hours, remaining_minutes = divmod(minutes, 60)
    return f"{hours}h {remaining_minutes}m" if remaining_minutes > 0 else f"{hours}h"


def to_12_hour(wall_time: str) -> str:
    """Convert ``YYYY-MM-DD HH:MM:SS`` to ``MM/DD/YYYY h:MM:SS AM|PM``."""
    moment = datetime.strptime(wall_time, WALL_TIME_FORMAT)
    hour = moment.hour % 12 or 12
    period = "AM" if moment.hour < 12 else "PM"
    return f"{moment:%m/%d/%Y} {hour}:{moment:%M:%S} {period}"


def file_timestamp(moment: datetime) -> str:
    """ISO timestamp safe for file names (``:`` and ``.`` replaced)."""
    return moment.isoformat(timespec="milliseconds").replace(":", "-").replace(".", "-")


class ReportWriter:
    """Writes run reports into ``directory``."""

    def __init__(
        self,
        directory: str | Path = ".",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.directory = Path(directory)
        self._clock = clock

    # Account runs

    def account_report(self, stats: RunStatistics) -> str:
        lines = [
            "Impact Groups Processing Report",
            f"Generated: {self._clock().isoformat()}",
            RULE,
            "",
            "SUMMARY:",
            f"- Total accounts processed: {stats.total_processed}",
            f"- Successful: {stats.successful}",
            f"- Failed: {stats.failed}",
            f"- Success rate: {stats.success_rate:.2f}%",
        ]
        if stats.execution_time_ms:
            lines.append(f"- Execution time: {format_execution_time(stats.execution_time_ms)}")
        lines.append("")

        if not stats.failures:
            lines.append("All accounts processed successfully!")
            return "\n".join(lines) + "\n"

        lines += ["FAILED ACCOUNTS:", "=" * 20]
        for error, records in group_failures(stats.failures).items():
            lines += ["", f"Error: {error}", f"Affected accounts ({len(records)}):"]
            lines += [
                f"  - Account ID: {record.identifier}, Impact Group: {record.group_key}"
                for record in records
            ]
        return "\n".join(lines) + "\n"

    @staticmethod
    def failed_accounts_csv(failures: list[FailureRecord]) -> str:
        """Failed accounts in the input CSV format, header only when none failed."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow([ACCOUNT_ID_COLUMN, GROUP_KEY_COLUMN])
        for record in failures:
            writer.writerow([record.identifier, record.group_key])
        return buffer.getvalue()

    def save_account_reports(self, stats: RunStatistics) -> tuple[Path, Path]:
        stamp = file_timestamp(self._clock())
        report_path = self._write(f"report_{stamp}.txt", self.account_report(stats))
        csv_path = self._write(
            f"failed_accounts_{stamp}.csv", self.failed_accounts_csv(stats.failures)
        )
        logger.info(f"Reports generated: {report_path}, {csv_path}")
        return report_path, csv_path

    # Interval runs

    def interval_report(self, stats: RunStatistics, file_name: str = "") -> str:
        lines = [
            WIDE_RULE,
            "SYNC API EXECUTION REPORT".center(80).rstrip(),
            WIDE_RULE,
            f"Generated: {self._clock().isoformat()}",
            f"Report File: {file_name}",
            "",
            "SUMMARY",
            "--------",
            f"Total Intervals Processed: {stats.total_processed}",
            f"Successful Calls: {stats.successful}",
            f"Failed Calls: {stats.failed}",
            f"Success Rate: {stats.success_rate:.1f}%",
            "",
            "TIMESHEET (12-hour format)",
            "--------------------------",
        ]
        for position, record in enumerate(stats.chunks, start=1):
            request = record.outcome.request
            status = "OK" if record.outcome.success else "FAILED"
            lines.append(
                f"{position}. {to_12_hour(request['startTime'])} - "
                f"{to_12_hour(request['endTime'])} {status}"
            )
        lines += ["", "API CALL DETAILS", "================", ""]

        for position, record in enumerate(stats.chunks, start=1):
            outcome = record.outcome
            lines += [
                f"CALL #{position}",
                "-" * 20,
                f"Time Range: {record.label}",
                f"Status: {'SUCCESS' if outcome.success else 'FAILED'}",
                "",
                "REQUEST PAYLOAD:",
                f"  Start Time: {outcome.request['startTime']}",
                f"  End Time: {outcome.request['endTime']}",
                "",
            ]
            if outcome.success and outcome.response is not None:
                rendered = json.dumps(outcome.response, indent=2, default=str)
                lines.append("RESPONSE:")
                lines += [f"  {line}" for line in rendered.splitlines()]
                lines.append("")
            if not outcome.success and outcome.error:
                lines += ["ERROR:", f"  {outcome.error}", ""]
            lines += [RULE, ""]

        lines += ["END OF REPORT", WIDE_RULE]
        return "\n".join(lines) + "\n"

    def save_interval_report(self, stats: RunStatistics) -> Path:
        file_name = f"sync-report-{file_timestamp(self._clock())}.txt"
        path = self._write(file_name, self.interval_report(stats, file_name))
        logger.info(f"Report saved to: {path}")
        return path

    def _write(self, file_name: str, content: str) -> Path:
        path = (self.directory / file_name).resolve()
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error(f"Error saving report {path}: {e}")
            raise
        return path


def group_failures(failures: list[FailureRecord]) -> dict[str, list[FailureRecord]]:
    """Failure records grouped by error message, in first-seen order."""
    groups: dict[str, list[FailureRecord]] = {}
    for record in failures:
        groups.setdefault(record.error, []).append(record)
    return groups


def print_summary(stats: RunStatistics, variant: SyncVariant = SyncVariant.ACCOUNTS) -> None:
    """Print the end-of-run console summary."""
    unit = "accounts" if variant is SyncVariant.ACCOUNTS else "intervals"
    print(f"\n{RULE}")
    print("PROCESSING COMPLETE")
    print(RULE)
    print(f"Total {unit} processed: {stats.total_processed}")
    print(f"Successful: {stats.successful}")
    print(f"Failed: {stats.failed}")
    if stats.total_processed > 0:
        print(f"Success rate: {stats.success_rate:.2f}%")
    if stats.execution_time_ms:
        print(f"Execution time: {format_execution_time(stats.execution_time_ms)}")

    if stats.failed > 0:
        print(f"\n{stats.failed} {unit} failed processing.")
        print("Check the generated reports for details.")
    else:
        print(f"\nAll {unit} processed successfully!")
