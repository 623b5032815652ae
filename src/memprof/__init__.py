"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Periodic memory and garbage-collection sampler.

A host scheduler drives a ``MemoryProfiler`` through the ``Profiler``
contract; every sample reads the runtime stats source and emits gauges to a
``MetricSink``.

Quick start::

    from memprof import InMemoryMetricSink, MemoryProfiler

    sink = InMemoryMetricSink()
    profiler = MemoryProfiler(sink)
    profiler.sample()
    print(sink.latest()["gc.gen0.count"])
"""

from .naming import normalize_category, normalize_pool_name, pool_prefix
from .profilers import MemoryProfiler, Profiler
from .runtime import (
    GcTimer,
    PythonRuntimeStatsSource,
    RuntimeStatsError,
    RuntimeStatsSource,
    RuntimeStatsUnavailableError,
)
from .settings import ProfilerSettings
from .sinks import (
    InMemoryMetricSink,
    MetricBackendError,
    MetricSink,
    NullMetricSink,
    PrefixedMetricSink,
    create_metric_sink,
)
from .tracker import CollectorDeltaState, GcInterval, GcTimeTracker
from .types import (
    UNBOUNDED,
    ClassLoadingSnapshot,
    CollectorSnapshot,
    MemoryPoolSnapshot,
    MemoryType,
    MemoryUsageSnapshot,
    TimeUnit,
)

__all__ = [
    "MemoryProfiler",
    "Profiler",
    "ProfilerSettings",
    "GcTimeTracker",
    "CollectorDeltaState",
    "GcInterval",
    "RuntimeStatsSource",
    "RuntimeStatsError",
    "RuntimeStatsUnavailableError",
    "PythonRuntimeStatsSource",
    "GcTimer",
    "MetricSink",
    "MetricBackendError",
    "NullMetricSink",
    "InMemoryMetricSink",
    "PrefixedMetricSink",
    "create_metric_sink",
    "normalize_category",
    "normalize_pool_name",
    "pool_prefix",
    "MemoryUsageSnapshot",
    "CollectorSnapshot",
    "MemoryPoolSnapshot",
    "ClassLoadingSnapshot",
    "MemoryType",
    "TimeUnit",
    "UNBOUNDED",
]
