"""Chunking layer for partitioning a sync run.

Architecture:
    The chunking layer consists of:
    - definitions.py: Chunk metadata structures (ChunkPolicy, WindowPolicy, ItemChunk)
    - planners.py: Chunk planning logic (item batches and time windows)
    - telemetry.py: Structured logging for the chunk lifecycle
"""

from __future__ import annotations

from .definitions import ChunkPolicy, ItemChunk, WindowPolicy
from .planners import ChunkPlanner, WindowPlanner, generate_windows

__all__ = [
    "ChunkPolicy",
    "WindowPolicy",
    "ItemChunk",
    "ChunkPlanner",
    "WindowPlanner",
    "generate_windows",
]
