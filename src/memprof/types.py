"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Snapshot types read from the runtime stats source on each sample.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

UNBOUNDED = -1


class MemoryType(Enum):
    """Memory-region category a pool belongs to."""

    HEAP = "heap"
    NON_HEAP = "non_heap"
    UNKNOWN = "unknown"


class TimeUnit(Enum):
    """Unit a profiler's sampling period is expressed in."""

    MILLISECONDS = 0.001
    SECONDS = 1.0
    MINUTES = 60.0

    def to_seconds(self, value: float) -> float:
        """Convert one period value in this unit into seconds."""
        return float(value) * self.value


@dataclass(frozen=True, slots=True)
class MemoryUsageSnapshot:
    """
    Point-in-time usage of one memory region, in bytes.

    Attributes:
        init_bytes: Size observed when the region was first inspected.
        used_bytes: Bytes currently in use.
        committed_bytes: Bytes reserved for the region.
        max_bytes: Upper bound, or ``UNBOUNDED`` (-1) when there is none.
    """

    init_bytes: int = 0
    used_bytes: int = 0
    committed_bytes: int = 0
    max_bytes: int = UNBOUNDED


@dataclass(frozen=True, slots=True)
class CollectorSnapshot:
    """Cumulative counters of one garbage collector."""

    name: str
    collection_count: int
    collection_time_ms: int


@dataclass(frozen=True, slots=True)
class MemoryPoolSnapshot:
    """Usage of one runtime-defined memory pool."""

    name: str
    type: MemoryType
    usage: MemoryUsageSnapshot


@dataclass(frozen=True, slots=True)
class ClassLoadingSnapshot:
    """Loaded/unloaded counters for the runtime's code units."""

    loaded: int
    total_loaded: int
    unloaded: int
