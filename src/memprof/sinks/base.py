"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Metric sink protocol and backend provider contract.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MetricSink(Protocol):
    """Destination for gauge values emitted by profilers."""

    def record_gauge(self, name: str, value: float) -> None:
        """Record one gauge value under its metric name."""
        ...


class MetricBackend(Protocol):
    """Provider contract used to construct metric sinks."""

    backend_id: str

    def create_sink(
        self,
        *,
        config: Mapping[str, Any] | None = None,
    ) -> MetricSink:
        """Create one metric sink instance from backend config."""
        ...


class PrefixedMetricSink:
    """Sink wrapper that prepends ``<prefix>.`` to every metric name."""

    def __init__(self, inner: MetricSink, prefix: str) -> None:
        self._inner = inner
        self._prefix = prefix.strip().rstrip(".")

    @property
    def inner(self) -> MetricSink:
        return self._inner

    def record_gauge(self, name: str, value: float) -> None:
        if self._prefix:
            name = f"{self._prefix}.{name}"
        self._inner.record_gauge(name, value)
