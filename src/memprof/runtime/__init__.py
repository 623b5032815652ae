"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Runtime stats sources consumed by profilers.
"""

from .base import RuntimeStatsError, RuntimeStatsSource, RuntimeStatsUnavailableError
from .gc_timer import GcTimer
from .python import KNOWN_POOL_FIELDS, PythonRuntimeStatsSource

__all__ = [
    "RuntimeStatsSource",
    "RuntimeStatsError",
    "RuntimeStatsUnavailableError",
    "GcTimer",
    "PythonRuntimeStatsSource",
    "KNOWN_POOL_FIELDS",
]
