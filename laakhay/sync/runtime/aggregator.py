"""Result aggregation for a sync run."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from ..models import ChunkRecord, DispatchOutcome, FailureRecord, RunStatistics, TimeWindow
from .chunking.definitions import ItemChunk

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ResultAggregator:
    """Accumulates per-chunk outcomes into RunStatistics.

    Every recorded chunk adds its unit count to ``total_processed`` and to
    exactly one of ``successful`` / ``failed``, so
    ``total_processed == successful + failed`` holds after each call. A failed
    chunk appends one FailureRecord per unit, all tagged with the chunk's error.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._stats = RunStatistics(start_time=clock())

    @property
    def stats(self) -> RunStatistics:
        return self._stats

    def record_chunk(self, chunk: ItemChunk, outcome: DispatchOutcome) -> None:
        failures = []
        if not outcome.success:
            failures = [
                FailureRecord(
                    identifier=item.account_id,
                    group_key=item.group_key,
                    error=outcome.error or "Unknown error",
                )
                for item in chunk.items
            ]
        self._record(chunk.chunk_index, chunk.label, chunk.size, outcome, failures)

    def record_window(self, window: TimeWindow, outcome: DispatchOutcome, chunk_index: int) -> None:
        failures = []
        if not outcome.success:
            failures = [
                FailureRecord(identifier=window.label, error=outcome.error or "Unknown error")
            ]
        self._record(chunk_index, window.label, 1, outcome, failures)

    def _record(
        self,
        chunk_index: int,
        label: str,
        units: int,
        outcome: DispatchOutcome,
        failures: list[FailureRecord],
    ) -> None:
        stats = self._stats
        if outcome.success:
            stats.successful += units
        else:
            stats.failed += units
            stats.failures.extend(failures)
        stats.total_processed += units
        stats.chunks.append(
            ChunkRecord(chunk_index=chunk_index, label=label, units=units, outcome=outcome)
        )

        logger.info(
            f"Progress: {stats.total_processed} processed, "
            f"{stats.successful} successful ({stats.success_rate:.1f}%)"
        )

    def finish(self) -> RunStatistics:
        """Stamp the end time and return the final statistics."""
        if self._stats.end_time is None:
            self._stats.end_time = self._clock()
        return self._stats
