"""Run statistics and failure ledger."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict

from .outcome import DispatchOutcome


class FailureRecord(BaseModel):
    """One failed unit of work, tagged with its chunk-level error.

    ``identifier`` is the account id for item chunks and the window label
    for time windows (which have no group key).
    """

    identifier: int | str
    group_key: str | None = None
    error: str

    model_config = ConfigDict(frozen=True)


@dataclass
class ChunkRecord:
    """Outcome of one dispatched chunk, in dispatch order."""

    chunk_index: int
    label: str
    units: int
    outcome: DispatchOutcome


@dataclass
class RunStatistics:
    """Process-wide accumulator mutated only by the ResultAggregator.

    Attributes:
        total_processed: Units recorded so far, success or failure
        successful: Units whose chunk succeeded
        failed: Units whose chunk failed
        failures: Ordered per-unit failure ledger
        chunks: Ordered per-chunk outcomes
        start_time: Wall clock at aggregator construction
        end_time: Wall clock when the run was finished
    """

    start_time: datetime
    total_processed: int = 0
    successful: int = 0
    failed: int = 0
    failures: list[FailureRecord] = field(default_factory=list)
    chunks: list[ChunkRecord] = field(default_factory=list)
    end_time: datetime | None = None

    @property
    def elapsed(self) -> timedelta | None:
        if self.end_time is None:
            return None
        return self.end_time - self.start_time

    @property
    def execution_time_ms(self) -> int | None:
        elapsed = self.elapsed
        if elapsed is None:
            return None
        return int(elapsed.total_seconds() * 1000)

    @property
    def success_rate(self) -> float:
        """Percentage of processed units that succeeded (0.0 when nothing ran)."""
        if self.total_processed == 0:
            return 0.0
        return self.successful / self.total_processed * 100

    @property
    def is_consistent(self) -> bool:
        return self.total_processed == self.successful + self.failed
