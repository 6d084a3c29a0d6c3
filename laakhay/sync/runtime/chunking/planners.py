"""Chunk planning logic for partitioning a run.

This module provides the planners that split a run into dispatch units:
ChunkPlanner for count-bounded batches of work items and WindowPlanner for
duration-bounded time windows over a date range.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from ...core.exceptions import InvalidRangeError, ValidationError
from ...models import TimeWindow, WorkItem
from .definitions import ChunkPolicy, ItemChunk, WindowPolicy
from .telemetry import log_chunk_plan


class ChunkPlanner:
    """Plans fixed-size batches of work items.

    N items with a batch size of B produce ceil(N/B) chunks, each of size B
    except possibly the last. Input order is preserved within and across
    chunks, and an empty remainder produces no trailing chunk.
    """

    def __init__(self, policy: ChunkPolicy) -> None:
        self._policy = policy

    @property
    def policy(self) -> ChunkPolicy:
        return self._policy

    def plan(self, items: Sequence[WorkItem]) -> list[ItemChunk]:
        """Plan chunks for an ordered sequence of work items.

        Args:
            items: Work items in dispatch order

        Returns:
            List of item chunks (empty if there are no items)
        """
        size = self._policy.max_items
        chunks = [
            ItemChunk(items=tuple(items[offset : offset + size]), chunk_index=index)
            for index, offset in enumerate(range(0, len(items), size))
        ]

        log_chunk_plan(
            variant="accounts",
            total_chunks=len(chunks),
            total_units=len(items),
            max_items=size,
        )

        return chunks


class WindowPlanner:
    """Plans contiguous time windows over a date range.

    Windows are [S, S+D), [S+D, S+2D), ... with the last one truncated to
    end exactly at E.
    """

    def __init__(self, policy: WindowPolicy | None = None, tz: tzinfo | None = None) -> None:
        """Initialize window planner.

        Args:
            policy: Window duration policy (default: two-hour windows)
            tz: Zone used to render the formatted window bounds (default: America/Chicago)
        """
        self._policy = policy or WindowPolicy()
        self._tz = tz or ZoneInfo("America/Chicago")

    def plan(self, start: datetime, end: datetime) -> list[TimeWindow]:
        """Plan windows covering [start, end).

        Args:
            start: Range start (timezone-aware)
            end: Range end (timezone-aware)

        Returns:
            List of windows in chronological order

        Raises:
            ValidationError: If either bound is naive
            InvalidRangeError: If start is not strictly before end
        """
        if start.tzinfo is None or end.tzinfo is None:
            raise ValidationError("window bounds must be timezone-aware datetimes")
        if start >= end:
            raise InvalidRangeError("Start date must be before end date")

        # Step in UTC so every window spans exactly ``duration`` of elapsed time
        start = start.astimezone(UTC)
        end = end.astimezone(UTC)
        duration = self._policy.duration
        windows: list[TimeWindow] = []
        current_start = start

        while current_start < end:
            window_end = min(current_start + duration, end)
            windows.append(TimeWindow.from_bounds(current_start, window_end, self._tz))
            current_start = window_end

        log_chunk_plan(
            variant="intervals",
            total_chunks=len(windows),
            total_units=len(windows),
            window_size=duration,
        )

        return windows


def generate_windows(
    start: datetime,
    end: datetime,
    duration: timedelta = timedelta(hours=2),
    tz: tzinfo | None = None,
) -> list[TimeWindow]:
    """Convenience wrapper around WindowPlanner."""
    return WindowPlanner(WindowPolicy(duration=duration), tz=tz).plan(start, end)
