"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Profiler settings and explicit config loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from .sinks import MetricSink, create_metric_sink


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "y", "on")


@dataclass(frozen=True, slots=True)
class ProfilerSettings:
    """Explicit settings used to build profilers and their metric sink."""

    sink_backend: str = "null"
    metric_prefix: str = ""
    trace_allocations: bool = False
    otel_meter_name: str = "memprof"
    prometheus_namespace: str = "memprof"

    @staticmethod
    def from_env() -> "ProfilerSettings":
        """Load settings from environment variables."""
        return ProfilerSettings(
            sink_backend=os.getenv("MEMPROF_SINK", "null"),
            metric_prefix=os.getenv("MEMPROF_PREFIX", ""),
            trace_allocations=_env_bool("MEMPROF_TRACE_ALLOCATIONS", False),
            otel_meter_name=os.getenv("MEMPROF_OTEL_METER", "memprof"),
            prometheus_namespace=os.getenv("MEMPROF_PROMETHEUS_NAMESPACE", "memprof"),
        )

    def sink_config(self) -> dict[str, Any]:
        """Backend config payload derived from these settings."""
        backend = self.sink_backend.strip().lower()
        if backend == "otel":
            return {"meter_name": self.otel_meter_name}
        if backend == "prometheus":
            return {"namespace": self.prometheus_namespace}
        return {}

    def create_sink(self) -> MetricSink:
        """Resolve the configured backend, wrapping it when a prefix is set."""
        return create_metric_sink(
            self.sink_backend,
            config=self.sink_config(),
            prefix=self.metric_prefix,
        )
