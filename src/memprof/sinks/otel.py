"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

OpenTelemetry metric backend.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .base import MetricSink


@dataclass(slots=True)
class OpenTelemetryMetricSink:
    """OpenTelemetry sink with lazy meter and per-name gauge instruments."""

    meter_name: str = "memprof"
    unit: str = ""
    meter_provider: Any = None

    _meter: Any = field(default=None, init=False, repr=False)
    _gauges: dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    def _ensure_meter(self) -> None:
        if self._meter is not None:
            return
        try:
            from opentelemetry import metrics
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(
                "OpenTelemetryMetricSink requires 'opentelemetry-api'"
            ) from exc
        self._meter = metrics.get_meter(
            self.meter_name, meter_provider=self.meter_provider
        )

    def record_gauge(self, name: str, value: float) -> None:
        self._ensure_meter()
        gauge = self._gauges.get(name)
        if gauge is None:
            gauge = self._meter.create_gauge(name, unit=self.unit)
            self._gauges[name] = gauge
        gauge.set(value)


class OpenTelemetryMetricBackend:
    """Backend provider for OpenTelemetry sink."""

    backend_id = "otel"

    def create_sink(
        self,
        *,
        config: Mapping[str, Any] | None = None,
    ) -> MetricSink:
        conf = dict(config or {})
        return OpenTelemetryMetricSink(
            meter_name=str(conf.get("meter_name", "memprof")),
            unit=str(conf.get("unit", "")),
            meter_provider=conf.get("meter_provider"),
        )
