"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Capability contract shared by every periodically driven profiler.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..types import TimeUnit


@runtime_checkable
class Profiler(Protocol):
    """
    Profiler driven by a host scheduler.

    The host calls ``sample()`` every ``period`` ``time_unit`` and ``flush()``
    exactly once before teardown.
    """

    @property
    def period(self) -> int:
        """Sampling period, expressed in ``time_unit``."""
        ...

    @property
    def time_unit(self) -> TimeUnit:
        """Unit of ``period``."""
        ...

    def sample(self) -> None:
        """Take one periodic sample."""
        ...

    def flush(self) -> None:
        """Report any remaining data before shutdown."""
        ...
