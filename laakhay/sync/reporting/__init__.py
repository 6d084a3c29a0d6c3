"""Run reporting."""

from .report import (
    ReportWriter,
    format_execution_time,
    group_failures,
    print_summary,
    to_12_hour,
)

__all__ = [
    "ReportWriter",
    "format_execution_time",
    "group_failures",
    "print_summary",
    "to_12_hour",
]
