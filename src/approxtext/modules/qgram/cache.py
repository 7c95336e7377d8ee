"""Decomposition cache for the Q-gram engine."""

from __future__ import annotations

import threading
from collections import Counter

import structlog

__all__ = [
    "CacheKey",
    "DecompositionCache",
]

logger = structlog.get_logger()

# (q_size, padded text)
CacheKey = tuple[int, str]


class DecompositionCache:
    """Thread-safe mapping of (q_size, padded text) to n-gram counts.

    Entries are never invalidated on their own; strings are immutable, so a
    stored decomposition stays correct for the life of the cache. A disabled
    cache accepts writes and drops them.
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = enabled
        self._entries: dict[CacheKey, Counter[str]] = {}
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def get(self, key: CacheKey) -> Counter[str] | None:
        """Return the stored counts for key, or None on a miss."""
        if not self._enabled:
            return None
        with self._lock:
            return self._entries.get(key)

    def put(self, key: CacheKey, grams: Counter[str]) -> Counter[str]:
        """Store counts for key and return the stored value.

        If another thread stored the same key first, its value wins so
        every caller sees one shared map per key.
        """
        if not self._enabled:
            return grams
        with self._lock:
            return self._entries.setdefault(key, grams)

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
        logger.debug("qgram_cache_cleared", entries=dropped)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
