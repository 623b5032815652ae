"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Prometheus metric backend.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from .base import MetricSink

_INVALID_CHARS_RE = re.compile(r"[^a-zA-Z0-9_:]")


def prometheus_metric_name(name: str) -> str:
    """Rewrite a dotted/hyphenated metric name into the Prometheus grammar."""
    cleaned = _INVALID_CHARS_RE.sub("_", name)
    if not cleaned or cleaned[0].isdigit():
        cleaned = f"_{cleaned}"
    return cleaned


class PrometheusMetricSink:
    """
    Prometheus-backed gauge sink.

    Requires `prometheus_client` package.
    """

    def __init__(self, *, namespace: str = "memprof", registry: Any = None) -> None:
        try:
            from prometheus_client import REGISTRY, Gauge
        except ModuleNotFoundError as exc:  # pragma: no cover
            raise RuntimeError(
                "PrometheusMetricSink requires `prometheus_client` to be installed."
            ) from exc

        self._Gauge = Gauge
        self._namespace = namespace
        self._registry = registry if registry is not None else REGISTRY
        self._gauges: dict[str, Any] = {}

    def record_gauge(self, name: str, value: float) -> None:
        gauge = self._gauges.get(name)
        if gauge is None:
            gauge = self._Gauge(
                name=prometheus_metric_name(name),
                documentation=f"memprof gauge {name}",
                namespace=self._namespace,
                registry=self._registry,
            )
            self._gauges[name] = gauge
        gauge.set(value)


class PrometheusMetricBackend:
    """Backend provider for Prometheus sink."""

    backend_id = "prometheus"

    def create_sink(
        self,
        *,
        config: Mapping[str, Any] | None = None,
    ) -> MetricSink:
        conf = dict(config or {})
        return PrometheusMetricSink(
            namespace=str(conf.get("namespace", "memprof")),
            registry=conf.get("registry"),
        )
