"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Per-collector GC time baselines used to derive interval pause time.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class GcInterval:
    """Interval GC time computed against the baseline read at that moment."""

    name: str
    time_ms: int
    baseline_ms: int

    @property
    def runtime_ms(self) -> int:
        return self.time_ms - self.baseline_ms


@dataclass(slots=True)
class CollectorDeltaState:
    """Last committed cumulative GC time for one collector."""

    last_observed_time_ms: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def read(self) -> int:
        with self._lock:
            return self.last_observed_time_ms

    def commit(self, time_ms: int, expected_baseline_ms: int) -> bool:
        """
        Move the baseline to ``time_ms`` when the interval was positive.

        Zero intervals and negative ones (counter reset) keep the baseline. The
        commit is skipped if another sample moved the baseline since it was read.
        """
        with self._lock:
            if int(time_ms) - expected_baseline_ms <= 0:
                return False
            if self.last_observed_time_ms != expected_baseline_ms:
                return False
            self.last_observed_time_ms = int(time_ms)
            return True


class GcTimeTracker:
    """
    Fixed table of collector baselines keyed by collector name.

    The key set is frozen at construction; entries are never added or removed.
    Each entry carries its own lock, held only for the read or the commit so
    callers can emit between the two without holding it.
    """

    def __init__(self, collector_names: Iterable[str]) -> None:
        states = {str(name): CollectorDeltaState() for name in collector_names}
        self._states: Mapping[str, CollectorDeltaState] = MappingProxyType(states)

    def interval(self, name: str, time_ms: int) -> GcInterval:
        """Compute the interval GC time without touching the baseline."""
        return GcInterval(
            name=name,
            time_ms=int(time_ms),
            baseline_ms=self._states[name].read(),
        )

    def commit(self, interval: GcInterval) -> bool:
        """Commit a previously computed interval; returns whether it moved."""
        return self._states[interval.name].commit(
            interval.time_ms, interval.baseline_ms
        )

    def update(self, name: str, time_ms: int) -> int:
        """Compute and commit in one call; returns the interval GC time."""
        state = self._states[name]
        while True:
            interval = self.interval(name, time_ms)
            if interval.runtime_ms <= 0 or state.commit(
                interval.time_ms, interval.baseline_ms
            ):
                return interval.runtime_ms

    def baseline(self, name: str) -> int:
        """Return the committed baseline for one collector."""
        return self._states[name].read()

    def names(self) -> list[str]:
        return list(self._states)

    def __contains__(self, name: object) -> bool:
        return name in self._states

    def __len__(self) -> int:
        return len(self._states)
