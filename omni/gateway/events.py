"""Inbound message shape consumed by the pipeline."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from omni.session.history import build_session_key

GROUP_CHAT_TYPES = {"group", "supergroup"}


@dataclass
class BotIdentity:
    """The bot account receiving messages."""

    id: str
    username: str | None = None


@dataclass
class InboundMessage:
    """Message received from a chat channel."""

    channel: str
    sender_id: str
    chat_id: str
    content: str
    chat_type: str = "private"
    message_id: int | None = None
    mentions: list[str] = field(default_factory=list)  # usernames from mention entities
    reply_to_sender_id: str | None = None
    system_event: bool = False
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_group(self) -> bool:
        return self.chat_type in GROUP_CHAT_TYPES

    @property
    def session_key(self) -> str:
        return build_session_key(self.channel, self.chat_id, chat_type=self.chat_type)
