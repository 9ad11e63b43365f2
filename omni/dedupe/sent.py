"""Tracks message ids the bot itself sent, per chat."""

from __future__ import annotations

import time
from typing import Callable

from omni.dedupe.window import TimeWindowedCache

SENT_TTL_SECONDS = 24 * 60 * 60
CLEANUP_THRESHOLD = 100


class SentMessageCache:
    """
    Remembers bot-authored message ids for 24 hours.

    Recording only sweeps expired ids once a chat holds more than
    ``cleanup_threshold`` entries; lookups always sweep the queried chat first.
    """

    def __init__(
        self,
        ttl_seconds: float = SENT_TTL_SECONDS,
        cleanup_threshold: int = CLEANUP_THRESHOLD,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.cleanup_threshold = max(1, int(cleanup_threshold))
        self._cache = TimeWindowedCache(ttl_seconds=ttl_seconds, clock=clock)

    def record(self, chat_id: str | int, message_id: int) -> None:
        if not self._cache.add(chat_id, message_id):
            return
        if self._cache.size(chat_id) > self.cleanup_threshold:
            self._cache.prune(chat_id)

    def was_sent_by_bot(self, chat_id: str | int, message_id: int) -> bool:
        return self._cache.contains(chat_id, message_id)

    def size(self, chat_id: str | int) -> int:
        return self._cache.size(chat_id)

    def clear(self) -> None:
        self._cache.clear()
