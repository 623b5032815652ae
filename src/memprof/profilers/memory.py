"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Memory and garbage-collection profiler.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..naming import pool_prefix
from ..runtime.base import RuntimeStatsSource
from ..settings import ProfilerSettings
from ..sinks import MetricSink
from ..tracker import GcTimeTracker
from ..types import MemoryUsageSnapshot, TimeUnit

logger = logging.getLogger("memprof.profilers.memory")

PERIOD = 10


class MemoryProfiler:
    """
    Emit memory usage, GC and module-loading gauges on every sample.

    The collector set is discovered once, at construction; each collector's
    ``runtime`` gauge is the GC time spent since the previous sample.
    """

    def __init__(
        self,
        sink: MetricSink,
        source: RuntimeStatsSource | None = None,
        *,
        settings: ProfilerSettings | None = None,
    ) -> None:
        self._settings = settings or ProfilerSettings()
        self._owns_source = source is None
        if source is None:
            from ..runtime.python import PythonRuntimeStatsSource

            source = PythonRuntimeStatsSource(
                trace_allocations=self._settings.trace_allocations
            )
        self._sink = sink
        self._source = source
        try:
            collector_names = [c.name for c in source.collectors()]
        except Exception:
            self.close()
            raise
        self._gc_times = GcTimeTracker(collector_names)
        logger.debug("MemoryProfiler tracking collectors: %s", collector_names)

    @classmethod
    def from_settings(cls, settings: ProfilerSettings | None = None) -> MemoryProfiler:
        """Build a profiler whose sink and source come from settings."""
        resolved = settings or ProfilerSettings.from_env()
        logger.info(
            "Building MemoryProfiler (sink=%s, prefix=%r)",
            resolved.sink_backend,
            resolved.metric_prefix,
        )
        return cls(resolved.create_sink(), settings=resolved)

    @property
    def period(self) -> int:
        return PERIOD

    @property
    def time_unit(self) -> TimeUnit:
        return TimeUnit.SECONDS

    @property
    def interval_s(self) -> float:
        """Sampling period in seconds."""
        return self.time_unit.to_seconds(self.period)

    @property
    def source(self) -> RuntimeStatsSource:
        return self._source

    @property
    def gc_times(self) -> GcTimeTracker:
        return self._gc_times

    def close(self) -> None:
        """Release the runtime stats source if this profiler built it."""
        if not self._owns_source:
            return
        close = getattr(self._source, "close", None)
        if close is not None:
            close()
        self._owns_source = False
        logger.debug("MemoryProfiler closed its runtime stats source")

    def __enter__(self) -> MemoryProfiler:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def configure(self, arguments: Mapping[str, Any] | None = None) -> None:
        """Accept host arguments; this profiler takes no options."""
        if arguments:
            logger.debug("MemoryProfiler ignoring arguments: %s", sorted(arguments))

    def sample(self) -> None:
        """Profile memory usage and GC statistics."""
        self._record_stats()

    def flush(self) -> None:
        self._record_stats()

    def _record_stats(self) -> None:
        source = self._source
        emitted = 0

        self._record_gauge(
            "pending-finalization-count", source.pending_finalization_count()
        )
        emitted += 1
        emitted += self._record_memory_usage("heap.total", source.heap_usage())
        emitted += self._record_memory_usage("nonheap.total", source.non_heap_usage())

        for collector in source.collectors():
            if collector.name not in self._gc_times:
                continue
            interval = self._gc_times.interval(
                collector.name, collector.collection_time_ms
            )
            self._record_gauge(f"gc.{collector.name}.count", collector.collection_count)
            self._record_gauge(f"gc.{collector.name}.time", interval.time_ms)
            self._record_gauge(f"gc.{collector.name}.runtime", interval.runtime_ms)
            self._gc_times.commit(interval)
            emitted += 3

        classes = source.class_loading()
        self._record_gauge("loaded-class-count", classes.loaded)
        self._record_gauge("total-loaded-class-count", classes.total_loaded)
        self._record_gauge("unloaded-class-count", classes.unloaded)
        emitted += 3

        for pool in source.memory_pools():
            emitted += self._record_memory_usage(pool_prefix(pool), pool.usage)

        logger.debug("MemoryProfiler emitted %d gauge(s)", emitted)

    def _record_memory_usage(self, prefix: str, usage: MemoryUsageSnapshot) -> int:
        self._record_gauge(f"{prefix}.init", usage.init_bytes)
        self._record_gauge(f"{prefix}.used", usage.used_bytes)
        self._record_gauge(f"{prefix}.committed", usage.committed_bytes)
        self._record_gauge(f"{prefix}.max", usage.max_bytes)
        return 4

    def _record_gauge(self, name: str, value: float) -> None:
        self._sink.record_gauge(name, value)
