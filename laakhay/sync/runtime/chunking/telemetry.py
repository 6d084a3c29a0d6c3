"""Structured logging for chunked dispatch.

This module provides telemetry hooks for the chunk lifecycle, emitting
structured log records (stable event name as the message, fields in
``extra``) for observability.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from ...models import RunStatistics

logger = logging.getLogger(__name__)


def log_chunk_plan(
    *,
    variant: str,
    total_chunks: int,
    total_units: int,
    max_items: int | None = None,
    window_size: timedelta | None = None,
) -> None:
    """Log chunk plan creation.

    Args:
        variant: Sync variant identifier ("accounts" or "intervals")
        total_chunks: Total number of chunks planned
        total_units: Items (or windows) covered by the plan
        max_items: Count bound per chunk (if item-based)
        window_size: Duration bound per window (if time-based)
    """
    logger.info(
        "chunk_plan_created",
        extra={
            "variant": variant,
            "total_chunks": total_chunks,
            "total_units": total_units,
            "max_items": max_items,
            "window_size": int(window_size.total_seconds()) if window_size else None,
        },
    )


def log_chunk_started(*, variant: str, chunk_index: int, total_chunks: int, units: int) -> None:
    logger.info(
        "chunk_dispatch_started",
        extra={
            "variant": variant,
            "chunk_index": chunk_index,
            "total_chunks": total_chunks,
            "units": units,
        },
    )


def log_chunk_completed(
    *,
    variant: str,
    chunk_index: int,
    units: int,
    attempts: int,
    latency_ms: float | None = None,
) -> None:
    """Log successful completion of a single chunk.

    Args:
        variant: Sync variant identifier
        chunk_index: Zero-based index of the chunk
        units: Number of items (or windows) the chunk carried
        attempts: HTTP attempts made, retries included
        latency_ms: Latency in milliseconds (optional)
    """
    logger.info(
        "chunk_completed",
        extra={
            "variant": variant,
            "chunk_index": chunk_index,
            "units": units,
            "attempts": attempts,
            "latency_ms": latency_ms,
        },
    )


def log_chunk_error(
    *,
    variant: str,
    chunk_index: int,
    units: int,
    error_message: str,
    status_code: int | None = None,
) -> None:
    """Log a chunk recorded as failed.

    Args:
        variant: Sync variant identifier
        chunk_index: Zero-based index of the chunk that failed
        units: Number of items (or windows) marked failed
        error_message: Chunk-level error message
        status_code: HTTP status of the final attempt, if any
    """
    logger.error(
        "chunk_error",
        extra={
            "variant": variant,
            "chunk_index": chunk_index,
            "units": units,
            "error_message": error_message,
            "status_code": status_code,
        },
    )


def log_retry_scheduled(
    *, url: str, attempt: int, max_retries: int, delay: float, error: str
) -> None:
    logger.warning(
        "dispatch_retry_scheduled",
        extra={
            "url": url,
            "attempt": attempt,
            "max_retries": max_retries,
            "delay_seconds": delay,
            "error_message": error,
        },
    )


def log_credential_refresh_requested(*, reason: str) -> None:
    logger.warning("credential_refresh_requested", extra={"reason": reason})


def log_credential_refreshed(*, credential_version: int, recovery_cycles: int) -> None:
    logger.info(
        "credential_refreshed",
        extra={"credential_version": credential_version, "recovery_cycles": recovery_cycles},
    )


def log_run_complete(*, variant: str, stats: RunStatistics) -> None:
    """Log completion of a run with its final totals."""
    logger.info(
        "run_complete",
        extra={
            "variant": variant,
            "total_processed": stats.total_processed,
            "successful": stats.successful,
            "failed": stats.failed,
            "failure_records": len(stats.failures),
            "execution_time_ms": stats.execution_time_ms,
        },
    )
