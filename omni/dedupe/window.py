"""Sliding-window, capacity-bounded id sets partitioned by scope."""

from __future__ import annotations

import time
from typing import Callable, Hashable


def normalize_scope(scope: object) -> str:
    if scope is None:
        return ""
    return str(scope).strip()


class TimeWindowedCache:
    """
    Per-scope ordered mapping of ``id -> first-seen time``.

    Ids expire once ``now - seen >= ttl_seconds``. When ``max_entries`` is set,
    the oldest-inserted ids of a scope are evicted to keep it within bounds.
    Not thread-safe: callers on one event loop must not interleave writes to
    the same scope from multiple threads.
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl_seconds = float(ttl_seconds)
        self.max_entries = max_entries
        self._clock = clock
        self._scopes: dict[str, dict[Hashable, float]] = {}

    def prune(self, scope: object, now: float | None = None) -> int:
        """Drop expired and overflowing ids from a scope. Returns how many were removed."""
        entries = self._scopes.get(normalize_scope(scope))
        if not entries:
            return 0
        return self._prune_entries(entries, self._clock() if now is None else now)

    def _prune_entries(self, entries: dict[Hashable, float], now: float) -> int:
        expired = [key for key, seen in entries.items() if now - seen >= self.ttl_seconds]
        for key in expired:
            del entries[key]
        removed = len(expired)
        if self.max_entries is not None and len(entries) > self.max_entries:
            removed += self._evict_oldest(entries, len(entries) - self.max_entries)
        return removed

    @staticmethod
    def _evict_oldest(entries: dict[Hashable, float], count: int) -> int:
        # dicts keep insertion order, so the first keys are the oldest.
        oldest = list(entries)[:count]
        for key in oldest:
            del entries[key]
        return len(oldest)

    def contains(self, scope: object, item_id: Hashable) -> bool:
        key = normalize_scope(scope)
        entries = self._scopes.get(key)
        if not entries:
            return False
        self._prune_entries(entries, self._clock())
        return item_id in entries

    def add(self, scope: object, item_id: Hashable) -> bool:
        """Record an id without pruning expired entries first. Returns False for an empty scope."""
        key = normalize_scope(scope)
        if not key:
            return False
        entries = self._scopes.setdefault(key, {})
        entries.pop(item_id, None)
        if self.max_entries is not None and len(entries) >= self.max_entries:
            self._evict_oldest(entries, len(entries) - self.max_entries + 1)
        entries[item_id] = self._clock()
        return True

    def check_and_record(self, scope: object, item_id: Hashable) -> bool:
        """
        Return True if ``item_id`` was already seen in ``scope`` within the window.

        Otherwise record it and return False. An empty scope never dedups and
        never records state.
        """
        key = normalize_scope(scope)
        if not key:
            return False
        now = self._clock()
        entries = self._scopes.get(key)
        if entries is None:
            entries = {}
            self._scopes[key] = entries
        self._prune_entries(entries, now)
        if item_id in entries:
            return True
        if self.max_entries is not None and len(entries) >= self.max_entries:
            self._evict_oldest(entries, len(entries) - self.max_entries + 1)
        entries[item_id] = now
        return False

    def size(self, scope: object) -> int:
        return len(self._scopes.get(normalize_scope(scope), {}))

    def scopes(self) -> list[str]:
        return list(self._scopes)

    def clear(self) -> None:
        self._scopes.clear()
