from __future__ import annotations

import gc
import sys
import tracemalloc

import psutil
import pytest

from memprof import (
    UNBOUNDED,
    InMemoryMetricSink,
    MemoryProfiler,
    MemoryType,
    PythonRuntimeStatsSource,
    RuntimeStatsSource,
    RuntimeStatsUnavailableError,
)


class _GoneProcess:
    pid = 999999

    def memory_info(self):
        raise psutil.NoSuchProcess(self.pid)


@pytest.fixture
def source():
    with PythonRuntimeStatsSource() as src:
        yield src


def test_satisfies_protocol(source):
    assert isinstance(source, RuntimeStatsSource)


def test_collectors_are_gc_generations(source):
    collectors = source.collectors()
    assert [c.name for c in collectors] == [
        f"gen{i}" for i in range(len(gc.get_stats()))
    ]
    before = sum(c.collection_count for c in collectors)
    gc.collect()
    assert sum(c.collection_count for c in source.collectors()) > before


def test_gc_time_is_non_decreasing(source):
    first = {c.name: c.collection_time_ms for c in source.collectors()}
    for _ in range(5):
        gc.collect()
    second = {c.name: c.collection_time_ms for c in source.collectors()}
    assert all(second[name] >= first[name] for name in first)


def test_non_heap_usage_reads_process_memory(source):
    usage = source.non_heap_usage()
    assert usage.used_bytes > 0
    assert usage.init_bytes > 0
    assert usage.committed_bytes >= usage.used_bytes
    assert usage.max_bytes == UNBOUNDED or usage.max_bytes > 0


def test_heap_usage_without_tracing_is_zero():
    if tracemalloc.is_tracing():
        pytest.skip("tracemalloc already tracing in this session")
    with PythonRuntimeStatsSource() as src:
        usage = src.heap_usage()
    assert (usage.init_bytes, usage.used_bytes, usage.committed_bytes) == (0, 0, 0)
    assert usage.max_bytes == UNBOUNDED


def test_trace_allocations_starts_and_stops_tracemalloc():
    if tracemalloc.is_tracing():
        pytest.skip("tracemalloc already tracing in this session")
    src = PythonRuntimeStatsSource(trace_allocations=True)
    try:
        assert tracemalloc.is_tracing()
        payload = [bytearray(1024) for _ in range(64)]
        usage = src.heap_usage()
        assert usage.used_bytes > 0
        assert usage.committed_bytes >= usage.used_bytes
        del payload
    finally:
        src.close()
    assert not tracemalloc.is_tracing()


def test_memory_pools_are_stable_and_categorized(source):
    pools = source.memory_pools()
    assert [p.name for p in pools] == [p.name for p in source.memory_pools()]
    by_name = {p.name: p for p in pools}
    assert by_name["Resident Set"].type is MemoryType.NON_HEAP
    assert by_name["Virtual Memory"].type is MemoryType.NON_HEAP
    if "Data Segment" in by_name:
        assert by_name["Data Segment"].type is MemoryType.HEAP
    assert all(p.usage.max_bytes == UNBOUNDED for p in pools)


def test_class_loading_tracks_module_table(source):
    snapshot = source.class_loading()
    assert snapshot.loaded > 0
    assert snapshot.total_loaded >= snapshot.loaded
    assert snapshot.unloaded == snapshot.total_loaded - snapshot.loaded


def test_class_loading_counts_removed_modules(source, monkeypatch):
    monkeypatch.setitem(sys.modules, "memprof_test_transient", object())
    loaded = source.class_loading()
    monkeypatch.delitem(sys.modules, "memprof_test_transient")
    after = source.class_loading()
    assert after.total_loaded >= loaded.total_loaded
    assert after.unloaded >= 1


def test_pending_finalization_counts_gc_garbage(source, monkeypatch):
    monkeypatch.setattr(gc, "garbage", [object(), object()])
    assert source.pending_finalization_count() == 2


def test_psutil_failure_is_wrapped():
    with PythonRuntimeStatsSource() as src:
        src._process = _GoneProcess()  # noqa: SLF001
        with pytest.raises(RuntimeStatsUnavailableError) as excinfo:
            src.non_heap_usage()
    assert isinstance(excinfo.value.__cause__, psutil.NoSuchProcess)


def test_close_uninstalls_gc_callback():
    src = PythonRuntimeStatsSource()
    assert src._gc_timer._on_gc in gc.callbacks  # noqa: SLF001
    src.close()
    assert src._gc_timer._on_gc not in gc.callbacks  # noqa: SLF001


def test_profiler_against_live_interpreter(source):
    sink = InMemoryMetricSink()
    profiler = MemoryProfiler(sink, source)
    profiler.sample()

    generations = len(gc.get_stats())
    pools = len(source.memory_pools())
    assert len(sink.names()) == 1 + 4 + 4 + generations * 3 + 3 + pools * 4
    assert "nonheap.resident-set.used" in sink.names()
    assert "gc.gen0.runtime" in sink.names()


def test_profiler_from_settings_builds_sink_and_source():
    from memprof import PrefixedMetricSink, ProfilerSettings

    baseline = len(gc.callbacks)
    settings = ProfilerSettings(sink_backend="inmemory", metric_prefix="svc")
    with MemoryProfiler.from_settings(settings) as profiler:
        assert isinstance(profiler.source, PythonRuntimeStatsSource)
        profiler.flush()
        sink = profiler._sink  # noqa: SLF001
        assert isinstance(sink, PrefixedMetricSink)
        assert "svc.pending-finalization-count" in sink.inner.names()
    assert len(gc.callbacks) == baseline


def test_profiler_releases_owned_source_on_close():
    baseline = len(gc.callbacks)
    for _ in range(5):
        profiler = MemoryProfiler(InMemoryMetricSink())
        profiler.sample()
        profiler.flush()
        profiler.close()
        profiler.close()
    assert len(gc.callbacks) == baseline


def test_profiler_context_manager_releases_owned_source():
    baseline = len(gc.callbacks)
    with MemoryProfiler(InMemoryMetricSink()) as profiler:
        assert len(gc.callbacks) == baseline + 1
        profiler.sample()
    assert len(gc.callbacks) == baseline
