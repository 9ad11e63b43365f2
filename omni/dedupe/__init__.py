"""Deduplication and sent-message tracking caches."""

from omni.dedupe.inbound import InboundDedupe
from omni.dedupe.sent import SentMessageCache
from omni.dedupe.window import TimeWindowedCache

__all__ = ["InboundDedupe", "SentMessageCache", "TimeWindowedCache"]
