"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cumulative CPython garbage-collection pause timing via ``gc.callbacks``.
"""

from __future__ import annotations

import gc
import logging
import threading
import time
from typing import Any

logger = logging.getLogger("memprof.runtime.gc_timer")


class GcTimer:
    """
    Accumulate wall-clock time spent in each GC generation.

    The callback only records ``perf_counter`` readings; totals are exposed
    in whole milliseconds as monotonically non-decreasing counters.
    """

    def __init__(self, generations: int | None = None) -> None:
        count = generations if generations is not None else len(gc.get_stats())
        self._totals_s: list[float] = [0.0] * count
        self._started: dict[int, float] = {}
        self._lock = threading.Lock()
        self._installed = False

    @property
    def generations(self) -> int:
        return len(self._totals_s)

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self) -> None:
        """Register the timing callback; repeated calls are no-ops."""
        if self._installed:
            return
        gc.callbacks.append(self._on_gc)
        self._installed = True
        logger.debug("GcTimer installed for %d generation(s)", self.generations)

    def uninstall(self) -> None:
        """Remove the timing callback if it is registered."""
        if not self._installed:
            return
        try:
            gc.callbacks.remove(self._on_gc)
        except ValueError:
            pass
        self._installed = False
        with self._lock:
            self._started.clear()
        logger.debug("GcTimer uninstalled")

    def total_ms(self, generation: int) -> int:
        """Return cumulative pause time for one generation in milliseconds."""
        with self._lock:
            return int(self._totals_s[generation] * 1000)

    def _on_gc(self, phase: str, info: dict[str, Any]) -> None:
        generation = int(info.get("generation", -1))
        if not 0 <= generation < len(self._totals_s):
            return
        now = time.perf_counter()
        with self._lock:
            if phase == "start":
                self._started[generation] = now
                return
            started = self._started.pop(generation, None)
            if phase == "stop" and started is not None:
                self._totals_s[generation] += now - started

    def __enter__(self) -> GcTimer:
        self.install()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.uninstall()
