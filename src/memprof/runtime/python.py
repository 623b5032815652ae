"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Runtime stats source backed by the running CPython interpreter.
"""

from __future__ import annotations

import gc
import logging
import sys
import threading
import tracemalloc
from dataclasses import dataclass
from typing import Any

import psutil

from ..types import (
    UNBOUNDED,
    ClassLoadingSnapshot,
    CollectorSnapshot,
    MemoryPoolSnapshot,
    MemoryType,
    MemoryUsageSnapshot,
)
from .base import RuntimeStatsUnavailableError
from .gc_timer import GcTimer

logger = logging.getLogger("memprof.runtime.python")

# psutil memory_info fields with a stable display name and category.
KNOWN_POOL_FIELDS: dict[str, tuple[str, MemoryType]] = {
    "data": ("Data Segment", MemoryType.HEAP),
    "rss": ("Resident Set", MemoryType.NON_HEAP),
    "vms": ("Virtual Memory", MemoryType.NON_HEAP),
    "shared": ("Shared Memory", MemoryType.NON_HEAP),
    "text": ("Text Segment", MemoryType.NON_HEAP),
    "lib": ("Shared Libraries", MemoryType.NON_HEAP),
}

# Platform fields that count events rather than bytes.
_NON_BYTE_FIELDS = frozenset({"pfaults", "pageins", "num_page_faults"})


@dataclass(frozen=True, slots=True)
class _PoolField:
    field: str
    name: str
    type: MemoryType
    init_bytes: int


class PythonRuntimeStatsSource:
    """
    Read memory, GC and module counters from the current interpreter.

    Collectors are the CPython GC generations (``gen0``..``genN``); pools are
    the byte fields of ``psutil.Process.memory_info()``. Both sets are fixed
    when the source is built.
    """

    def __init__(
        self,
        *,
        process: psutil.Process | None = None,
        trace_allocations: bool = False,
        gc_timer: GcTimer | None = None,
    ) -> None:
        self._process = process or psutil.Process()
        self._owns_tracemalloc = False
        if trace_allocations and not tracemalloc.is_tracing():
            tracemalloc.start()
            self._owns_tracemalloc = True
            logger.debug("tracemalloc started by runtime stats source")

        self._gc_timer = gc_timer or GcTimer()
        self._gc_timer.install()

        self._modules_lock = threading.Lock()
        self._seen_modules: set[str] = set(sys.modules.copy())

        self._heap_init = self._traced_memory()[0]
        info = self._memory_info()
        self._non_heap_init = int(info.rss)
        self._pool_fields = self._discover_pools(info)

    @staticmethod
    def _discover_pools(info: object) -> list[_PoolField]:
        out: list[_PoolField] = []
        for field_name in getattr(info, "_fields", ()):
            if field_name in _NON_BYTE_FIELDS:
                continue
            name, memory_type = KNOWN_POOL_FIELDS.get(
                field_name, (field_name.replace("_", " "), MemoryType.UNKNOWN)
            )
            out.append(
                _PoolField(
                    field=field_name,
                    name=name,
                    type=memory_type,
                    init_bytes=int(getattr(info, field_name)),
                )
            )
        return out

    def _memory_info(self) -> Any:
        try:
            return self._process.memory_info()
        except psutil.Error as exc:
            raise RuntimeStatsUnavailableError(
                f"Cannot read memory info for pid {self._process.pid}: {exc}"
            ) from exc

    def _address_space_limit(self) -> int:
        if not hasattr(psutil, "RLIMIT_AS") or not hasattr(self._process, "rlimit"):
            return UNBOUNDED
        try:
            soft, _hard = self._process.rlimit(psutil.RLIMIT_AS)
        except psutil.Error as exc:
            raise RuntimeStatsUnavailableError(
                f"Cannot read address-space limit: {exc}"
            ) from exc
        if soft == psutil.RLIM_INFINITY or soft < 0:
            return UNBOUNDED
        return int(soft)

    @staticmethod
    def _traced_memory() -> tuple[int, int]:
        if not tracemalloc.is_tracing():
            return 0, 0
        return tracemalloc.get_traced_memory()

    def pending_finalization_count(self) -> int:
        return len(gc.garbage)

    def heap_usage(self) -> MemoryUsageSnapshot:
        current, peak = self._traced_memory()
        return MemoryUsageSnapshot(
            init_bytes=self._heap_init,
            used_bytes=current,
            committed_bytes=peak,
            max_bytes=UNBOUNDED,
        )

    def non_heap_usage(self) -> MemoryUsageSnapshot:
        info = self._memory_info()
        return MemoryUsageSnapshot(
            init_bytes=self._non_heap_init,
            used_bytes=int(info.rss),
            committed_bytes=int(info.vms),
            max_bytes=self._address_space_limit(),
        )

    def collectors(self) -> list[CollectorSnapshot]:
        stats = gc.get_stats()
        return [
            CollectorSnapshot(
                name=f"gen{generation}",
                collection_count=int(entry.get("collections", 0)),
                collection_time_ms=(
                    self._gc_timer.total_ms(generation)
                    if generation < self._gc_timer.generations
                    else 0
                ),
            )
            for generation, entry in enumerate(stats)
        ]

    def class_loading(self) -> ClassLoadingSnapshot:
        current = sys.modules.copy()
        with self._modules_lock:
            self._seen_modules.update(current)
            total = len(self._seen_modules)
        loaded = len(current)
        return ClassLoadingSnapshot(
            loaded=loaded,
            total_loaded=total,
            unloaded=max(total - loaded, 0),
        )

    def memory_pools(self) -> list[MemoryPoolSnapshot]:
        info = self._memory_info()
        pools: list[MemoryPoolSnapshot] = []
        for pool in self._pool_fields:
            value = int(getattr(info, pool.field, 0))
            pools.append(
                MemoryPoolSnapshot(
                    name=pool.name,
                    type=pool.type,
                    usage=MemoryUsageSnapshot(
                        init_bytes=pool.init_bytes,
                        used_bytes=value,
                        committed_bytes=value,
                        max_bytes=UNBOUNDED,
                    ),
                )
            )
        return pools

    def close(self) -> None:
        """Uninstall the GC timer and stop tracemalloc if this source started it."""
        self._gc_timer.uninstall()
        if self._owns_tracemalloc and tracemalloc.is_tracing():
            tracemalloc.stop()
            logger.debug("tracemalloc stopped by runtime stats source")
        self._owns_tracemalloc = False

    def __enter__(self) -> PythonRuntimeStatsSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
