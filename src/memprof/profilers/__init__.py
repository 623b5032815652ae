"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Periodically driven profilers.
"""

from .base import Profiler
from .memory import PERIOD, MemoryProfiler

__all__ = ["Profiler", "MemoryProfiler", "PERIOD"]
