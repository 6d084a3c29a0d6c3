"""Data models for sync work units, wire payloads and run results.

Architecture:
    Input and wire models are Pydantic v2 and immutable (frozen=True), so a
    work item or payload cannot change between being built and being sent.
    Runtime accumulators (DispatchOutcome, RunStatistics) are dataclasses,
    mutated only by the component that owns them.

Model Categories:
    - Input: WorkItem, TimeWindow
    - Wire: AssignmentPayload, GroupBucket, IntervalRequest
    - Results: DispatchOutcome, ChunkRecord, FailureRecord, RunStatistics
"""

from .outcome import DispatchOutcome
from .payload import AssignmentPayload, GroupBucket, IntervalRequest
from .stats import ChunkRecord, FailureRecord, RunStatistics
from .window import TimeWindow
from .work_item import WorkItem

__all__ = [
    "AssignmentPayload",
    "ChunkRecord",
    "DispatchOutcome",
    "FailureRecord",
    "GroupBucket",
    "IntervalRequest",
    "RunStatistics",
    "TimeWindow",
    "WorkItem",
]
