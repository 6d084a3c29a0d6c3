"""Unit tests for chunk planning logic."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from laakhay.sync.core import InvalidRangeError, ValidationError
from laakhay.sync.models import WorkItem
from laakhay.sync.runtime.chunking import (
    ChunkPlanner,
    ChunkPolicy,
    ItemChunk,
    WindowPlanner,
    WindowPolicy,
    generate_windows,
)

CHICAGO = ZoneInfo("America/Chicago")


def make_items(count: int, groups: int = 3) -> list[WorkItem]:
    return [WorkItem(account_id=i, group_key=f"group-{i % groups}") for i in range(count)]


class TestChunkPolicy:
    """Test chunk policy validation."""

    @pytest.mark.parametrize("size", [0, -1])
    def test_non_positive_size_rejected(self, size):
        """Test a non-positive batch size is a ValidationError."""
        with pytest.raises(ValidationError):
            ChunkPolicy(max_items=size)

    def test_non_positive_window_rejected(self):
        """Test a zero window duration is a ValidationError."""
        with pytest.raises(ValidationError):
            WindowPolicy(duration=timedelta(0))

    def test_item_chunk_cannot_be_empty(self):
        """Test an empty chunk cannot be constructed."""
        with pytest.raises(ValueError):
            ItemChunk(items=())


class TestChunkPlanner:
    """Test ChunkPlanner functionality."""

    def test_sizes_for_partial_last_chunk(self):
        """Test 250 items with batch size 100 give 100, 100, 50."""
        planner = ChunkPlanner(ChunkPolicy(max_items=100))
        chunks = planner.plan(make_items(250))

        assert [chunk.size for chunk in chunks] == [100, 100, 50]
        assert [chunk.chunk_index for chunk in chunks] == [0, 1, 2]
        assert chunks[1].label == "batch 2"

    def test_exact_multiple_has_no_trailing_chunk(self):
        """Test an exact multiple produces no empty trailing chunk."""
        chunks = ChunkPlanner(ChunkPolicy(max_items=50)).plan(make_items(200))
        assert len(chunks) == 4
        assert all(chunk.size == 50 for chunk in chunks)

    @pytest.mark.parametrize("count,size", [(1, 100), (99, 100), (101, 100), (7, 3), (10, 1)])
    def test_chunk_count_is_ceiling(self, count, size):
        """Test N items with batch size B produce ceil(N/B) chunks."""
        chunks = ChunkPlanner(ChunkPolicy(max_items=size)).plan(make_items(count))
        assert len(chunks) == -(-count // size)
        assert sum(chunk.size for chunk in chunks) == count
        assert all(chunk.size <= size for chunk in chunks)

    def test_order_preserved(self):
        """Test concatenated chunks reproduce the input order."""
        items = make_items(23)
        chunks = ChunkPlanner(ChunkPolicy(max_items=5)).plan(items)
        flattened = [item for chunk in chunks for item in chunk.items]
        assert flattened == items

    def test_empty_input(self):
        """Test empty input produces no chunks."""
        assert ChunkPlanner(ChunkPolicy(max_items=10)).plan([]) == []


class TestWindowPlanner:
    """Test WindowPlanner functionality."""

    def test_truncated_last_window(self):
        """Test a 5-hour range in 2-hour windows ends exactly at the range end."""
        start = datetime(2024, 1, 1, 0, 0, tzinfo=CHICAGO)
        end = datetime(2024, 1, 1, 5, 0, tzinfo=CHICAGO)
        windows = WindowPlanner(WindowPolicy(timedelta(hours=2)), tz=CHICAGO).plan(start, end)

        assert [w.label for w in windows] == [
            "2024-01-01 00:00:00 - 2024-01-01 02:00:00",
            "2024-01-01 02:00:00 - 2024-01-01 04:00:00",
            "2024-01-01 04:00:00 - 2024-01-01 05:00:00",
        ]
        assert windows[0].start == start
        assert windows[-1].end == end

    def test_windows_are_contiguous(self):
        """Test each window starts where the previous one ended."""
        start = datetime(2024, 1, 1, tzinfo=UTC)
        end = start + timedelta(hours=25, minutes=30)
        windows = generate_windows(start, end, timedelta(hours=2), tz=CHICAGO)

        assert len(windows) == 13
        for previous, current in zip(windows, windows[1:]):
            assert previous.end == current.start
        assert all(w.duration <= timedelta(hours=2) for w in windows)

    def test_range_shorter_than_window(self):
        """Test a range shorter than the window yields one window."""
        start = datetime(2024, 1, 1, tzinfo=CHICAGO)
        windows = generate_windows(start, start + timedelta(minutes=30), tz=CHICAGO)
        assert len(windows) == 1
        assert windows[0].duration == timedelta(minutes=30)

    def test_dst_transition_uses_elapsed_time(self):
        """Test windows across spring-forward span real elapsed time."""
        start = datetime(2024, 3, 10, 0, 0, tzinfo=CHICAGO)
        end = datetime(2024, 3, 10, 4, 0, tzinfo=CHICAGO)
        windows = generate_windows(start, end, tz=CHICAGO)

        assert [w.label for w in windows] == [
            "2024-03-10 00:00:00 - 2024-03-10 03:00:00",
            "2024-03-10 03:00:00 - 2024-03-10 04:00:00",
        ]
        elapsed = end.astimezone(UTC) - start.astimezone(UTC)
        assert elapsed == timedelta(hours=3)
        assert sum((w.duration for w in windows), timedelta(0)) == elapsed

    @pytest.mark.parametrize("offset", [timedelta(0), timedelta(hours=-1)])
    def test_start_not_before_end(self, offset):
        """Test start >= end is an InvalidRangeError."""
        start = datetime(2024, 1, 1, tzinfo=CHICAGO)
        with pytest.raises(InvalidRangeError):
            generate_windows(start, start + offset)

    def test_naive_bounds_rejected(self):
        """Test naive datetimes are rejected."""
        with pytest.raises(ValidationError):
            generate_windows(datetime(2024, 1, 1), datetime(2024, 1, 2))
