"""Inbound message deduplication for retried or duplicated deliveries."""

from __future__ import annotations

import time
from typing import Callable

from loguru import logger

from omni.dedupe.window import TimeWindowedCache

DEFAULT_TTL_SECONDS = 20 * 60
DEFAULT_MAX_PER_CHAT = 5000
MIN_TTL_SECONDS = 1.0
MIN_MAX_PER_CHAT = 100


class InboundDedupe:
    """Drops messages whose id was already seen in the same chat recently."""

    def __init__(
        self,
        ttl_seconds: float | None = None,
        max_per_chat: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        ttl = DEFAULT_TTL_SECONDS if ttl_seconds is None else max(MIN_TTL_SECONDS, float(ttl_seconds))
        cap = DEFAULT_MAX_PER_CHAT if max_per_chat is None else max(MIN_MAX_PER_CHAT, int(max_per_chat))
        self._cache = TimeWindowedCache(ttl_seconds=ttl, max_entries=cap, clock=clock)

    @property
    def ttl_seconds(self) -> float:
        return self._cache.ttl_seconds

    @property
    def max_per_chat(self) -> int:
        return int(self._cache.max_entries or 0)

    def should_skip(self, chat_id: str | int | None, message_id: int) -> bool:
        """Return True if this message was already processed for the chat."""
        duplicate = self._cache.check_and_record(chat_id, message_id)
        if duplicate:
            logger.debug(f"Dropping duplicate inbound message {message_id} in chat {chat_id}")
        return duplicate

    def size(self, chat_id: str | int) -> int:
        return self._cache.size(chat_id)

    def clear(self) -> None:
        self._cache.clear()
