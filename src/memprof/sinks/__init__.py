"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Metric sink providers and registry utilities.
"""

from .base import MetricBackend, MetricSink, PrefixedMetricSink
from .inmemory import GaugeRecord, InMemoryMetricBackend, InMemoryMetricSink
from .null import NullMetricBackend, NullMetricSink
from .otel import OpenTelemetryMetricBackend, OpenTelemetryMetricSink
from .prometheus import (
    PrometheusMetricBackend,
    PrometheusMetricSink,
    prometheus_metric_name,
)
from .registry import (
    MetricBackendError,
    create_metric_sink,
    get_metric_backend,
    list_metric_backends,
    register_metric_backend,
)

# Register built-ins at import time.
register_metric_backend(NullMetricBackend())
register_metric_backend(InMemoryMetricBackend())
register_metric_backend(OpenTelemetryMetricBackend())
register_metric_backend(PrometheusMetricBackend())

__all__ = [
    "MetricSink",
    "MetricBackend",
    "MetricBackendError",
    "PrefixedMetricSink",
    "register_metric_backend",
    "get_metric_backend",
    "list_metric_backends",
    "create_metric_sink",
    "NullMetricBackend",
    "InMemoryMetricBackend",
    "OpenTelemetryMetricBackend",
    "PrometheusMetricBackend",
    "NullMetricSink",
    "InMemoryMetricSink",
    "OpenTelemetryMetricSink",
    "PrometheusMetricSink",
    "GaugeRecord",
    "prometheus_metric_name",
]
