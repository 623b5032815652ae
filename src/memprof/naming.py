"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Metric-name normalization for runtime supplied identifiers.
"""

from __future__ import annotations

import re

from .types import MemoryPoolSnapshot, MemoryType

_WHITESPACE_RE = re.compile(r"\s+")

_CATEGORY_NAMES: dict[MemoryType, str] = {
    MemoryType.HEAP: "heap",
    MemoryType.NON_HEAP: "nonheap",
}


def normalize_category(memory_type: object) -> str:
    """Map a memory-region category to its metric name fragment."""
    if isinstance(memory_type, MemoryType):
        return _CATEGORY_NAMES.get(memory_type, "unknown")
    return "unknown"


def normalize_pool_name(name: str) -> str:
    """
    Lowercase a pool name and hyphenate its whitespace.

    Leading and trailing whitespace is dropped; every inner whitespace run
    becomes a single ``-``.
    """
    return _WHITESPACE_RE.sub("-", name.strip().lower())


def pool_prefix(pool: MemoryPoolSnapshot) -> str:
    """Return the ``<type>.<name>`` metric prefix for one pool."""
    return f"{normalize_category(pool.type)}.{normalize_pool_name(pool.name)}"
