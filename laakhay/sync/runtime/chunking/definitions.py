"""Chunking metadata definitions and policy structures.

This module defines the data structures used to describe how a run is
partitioned: the size bound for item batches, the duration bound for time
windows, and the chunk unit itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from ...core.exceptions import ValidationError
from ...models import WorkItem


@dataclass(frozen=True)
class ChunkPolicy:
    """Count bound for item chunks.

    Attributes:
        max_items: Maximum number of work items per chunk (e.g., 100 accounts)
    """

    max_items: int

    def __post_init__(self) -> None:
        if self.max_items <= 0:
            raise ValidationError(f"batch size must be a positive number, got {self.max_items}")


@dataclass(frozen=True)
class WindowPolicy:
    """Duration bound for time-window chunks.

    Attributes:
        duration: Length of every window except possibly the last
    """

    duration: timedelta = timedelta(hours=2)

    def __post_init__(self) -> None:
        if self.duration <= timedelta(0):
            raise ValidationError(f"window duration must be positive, got {self.duration}")


@dataclass(frozen=True)
class ItemChunk:
    """One ordered, non-empty batch of work items.

    Attributes:
        items: Work items in input order
        chunk_index: Zero-based index of this chunk in the overall plan
    """

    items: tuple[WorkItem, ...]
    chunk_index: int = 0

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("ItemChunk cannot be empty")

    @property
    def size(self) -> int:
        return len(self.items)

    @property
    def label(self) -> str:
        return f"batch {self.chunk_index + 1}"
