"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Backend registry resolving gauge sinks by id.

Profilers only ever see a ``MetricSink``; hosts pick where gauges go by naming
a backend (``null``, ``inmemory``, ``otel``, ``prometheus`` or a custom one)
and optionally a dotted prefix applied to every gauge name.
"""

from __future__ import annotations

from collections.abc import Mapping
from threading import Lock
from typing import Any

from .base import MetricBackend, MetricSink, PrefixedMetricSink

DEFAULT_BACKEND = "null"

_BACKENDS: dict[str, MetricBackend] = {}
_LOCK = Lock()


class MetricBackendError(RuntimeError):
    """Raised when a gauge backend cannot be registered or resolved."""


def _backend_key(backend_id: str) -> str:
    return str(backend_id).strip().lower()


def register_metric_backend(backend: MetricBackend) -> None:
    """Register a backend; a later registration with the same id replaces it."""
    key = _backend_key(backend.backend_id)
    if not key:
        raise MetricBackendError("Metric backend id must be non-empty")
    with _LOCK:
        _BACKENDS[key] = backend


def get_metric_backend(backend_id: str) -> MetricBackend:
    with _LOCK:
        backend = _BACKENDS.get(_backend_key(backend_id))
    if backend is None:
        known = ", ".join(list_metric_backends()) or "none"
        raise MetricBackendError(
            f"Unknown metric backend '{backend_id}' (registered: {known})"
        )
    return backend


def list_metric_backends() -> list[str]:
    with _LOCK:
        return sorted(_BACKENDS)


def create_metric_sink(
    backend: str | MetricSink | None = None,
    *,
    config: Mapping[str, Any] | None = None,
    prefix: str = "",
) -> MetricSink:
    """
    Build the sink gauges are recorded into.

    Args:
        backend: Backend id, an existing sink to reuse, or ``None`` for the
            no-op backend.
        config: Backend-specific options, ignored for sink instances.
        prefix: Dotted namespace prepended to every gauge name; blank keeps
            names as emitted.

    Returns:
        The resolved sink, wrapped in ``PrefixedMetricSink`` when a prefix is set.
    """
    if backend is None or isinstance(backend, str):
        resolved = get_metric_backend(backend or DEFAULT_BACKEND)
        sink = resolved.create_sink(config=config)
    else:
        sink = backend
    if prefix.strip().strip("."):
        return PrefixedMetricSink(sink, prefix)
    return sink
