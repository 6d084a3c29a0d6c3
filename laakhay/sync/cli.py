"""Command-line entry point for sync runs.

Usage:
    laakhay-sync accounts [--env-file .env] [--csv accounts.csv]
    laakhay-sync intervals [--env-file .env]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from zoneinfo import ZoneInfo

from .core.config import AccountSyncConfig, IntervalSyncConfig, load_config
from .core.enums import SyncVariant
from .core.exceptions import SyncError
from .io import read_work_items, validate_date_range
from .reporting import ReportWriter, print_summary
from .runtime import (
    HTTPClient,
    SyncEngine,
    WindowPlanner,
    WindowPolicy,
    account_planning,
)

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="laakhay-sync", description="Chunked, credential-aware bulk sync runs"
    )
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="command", required=True)

    accounts = sub.add_parser("accounts", help="Enqueue grouped account assignments from a CSV")
    accounts.add_argument("--env-file", default=".env")
    accounts.add_argument("--csv", dest="csv_file", default=None, help="Overrides CSV_FILENAME")
    accounts.add_argument("--output-dir", default=".", help="Directory for the reports")

    intervals = sub.add_parser("intervals", help="Sync fixed time windows over a date range")
    intervals.add_argument("--env-file", default=".env")
    intervals.add_argument("--output-dir", default=".", help="Directory for the report")
    return p.parse_args(argv)


async def run_accounts(args: argparse.Namespace) -> None:
    config = load_config(AccountSyncConfig, args.env_file)
    csv_file = args.csv_file or config.csv_filename

    logger.info(f"Reading accounts from {csv_file}")
    items = read_work_items(csv_file)
    logger.info(f"Found {len(items)} valid accounts in CSV")
    if not items:
        logger.info("No valid accounts found in CSV file")
        return

    planner, builder = account_planning(config)
    async with HTTPClient(timeout=config.request_timeout) as http:
        engine = SyncEngine.from_config(config, http, env_file=args.env_file)
        stats = await engine.run_accounts(
            items, planner=planner, builder=builder, max_items=config.max_accounts
        )

    ReportWriter(args.output_dir).save_account_reports(stats)
    print_summary(stats, SyncVariant.ACCOUNTS)


async def run_intervals(args: argparse.Namespace) -> None:
    config = load_config(IntervalSyncConfig, args.env_file)
    tz = ZoneInfo(config.timezone)
    start, end = validate_date_range(config.start_date, config.end_date, tz)

    windows = WindowPlanner(WindowPolicy(duration=config.window_duration), tz=tz).plan(start, end)
    logger.info(f"Generated {len(windows)} time intervals")

    async with HTTPClient(timeout=config.request_timeout) as http:
        engine = SyncEngine.from_config(config, http, env_file=args.env_file)
        stats = await engine.run_intervals(windows)

    ReportWriter(args.output_dir).save_interval_report(stats)
    print_summary(stats, SyncVariant.INTERVALS)


COMMANDS = {
    SyncVariant.ACCOUNTS.value: run_accounts,
    SyncVariant.INTERVALS.value: run_intervals,
}


def run(argv: Sequence[str] | None = None) -> int:
    """Run a sync command and return the process exit code."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(COMMANDS[args.command](args))
    except (SyncError, OSError) as e:
        logger.error(f"Fatal error: {e}")
        return 1
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
