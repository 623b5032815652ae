"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

In-memory metric backend for tests and local debugging.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .base import MetricSink


@dataclass(frozen=True, slots=True)
class GaugeRecord:
    """One recorded gauge emission."""

    name: str
    value: float


@dataclass(slots=True)
class InMemoryMetricSink:
    """Metric sink that stores emitted gauges in process memory."""

    _gauges: list[GaugeRecord] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record_gauge(self, name: str, value: float) -> None:
        with self._lock:
            self._gauges.append(GaugeRecord(name=name, value=float(value)))

    def gauges(self) -> list[GaugeRecord]:
        """Return every recorded gauge in emission order."""
        with self._lock:
            return list(self._gauges)

    def names(self) -> list[str]:
        with self._lock:
            return [record.name for record in self._gauges]

    def latest(self) -> dict[str, float]:
        """Return the last recorded value for each metric name."""
        with self._lock:
            return {record.name: record.value for record in self._gauges}

    def clear(self) -> None:
        with self._lock:
            self._gauges.clear()


class InMemoryMetricBackend:
    """Backend provider for in-memory sink."""

    backend_id = "inmemory"

    def create_sink(
        self,
        *,
        config: Mapping[str, Any] | None = None,
    ) -> MetricSink:
        _ = config
        return InMemoryMetricSink()
