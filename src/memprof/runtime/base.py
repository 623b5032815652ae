"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Runtime stats source protocol and its failure types.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..types import (
    ClassLoadingSnapshot,
    CollectorSnapshot,
    MemoryPoolSnapshot,
    MemoryUsageSnapshot,
)


class RuntimeStatsError(RuntimeError):
    """Raised when runtime counters cannot be read."""


class RuntimeStatsUnavailableError(RuntimeStatsError):
    """Raised when the underlying process stats provider fails a query."""


@runtime_checkable
class RuntimeStatsSource(Protocol):
    """
    Read-only view over the host runtime's memory and GC counters.

    Collector and pool sets are expected to be stable for the lifetime of
    the source; only their values change between calls.
    """

    def pending_finalization_count(self) -> int:
        """Return the number of objects waiting on finalization."""
        ...

    def heap_usage(self) -> MemoryUsageSnapshot:
        """Return managed heap usage."""
        ...

    def non_heap_usage(self) -> MemoryUsageSnapshot:
        """Return usage outside the managed heap."""
        ...

    def collectors(self) -> list[CollectorSnapshot]:
        """Return cumulative counters for every collector."""
        ...

    def class_loading(self) -> ClassLoadingSnapshot:
        """Return loaded/unloaded code-unit counters."""
        ...

    def memory_pools(self) -> list[MemoryPoolSnapshot]:
        """Return usage for every memory pool."""
        ...
