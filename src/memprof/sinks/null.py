"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

No-op metric backend.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import MetricSink


class NullMetricSink:
    """No-op metric sink used as safe runtime default."""

    def record_gauge(self, name: str, value: float) -> None:
        _ = name
        _ = value


class NullMetricBackend:
    """Backend provider for no-op sink."""

    backend_id = "null"

    def create_sink(
        self,
        *,
        config: Mapping[str, Any] | None = None,
    ) -> MetricSink:
        _ = config
        return NullMetricSink()
