"""Chat-level access gating: sender allowlist, group allowlist, mention gate."""

from __future__ import annotations

import re
from typing import Iterable

from omni.gateway.events import BotIdentity, InboundMessage


def is_group_chat(msg: InboundMessage) -> bool:
    return msg.is_group


class AccessPolicy:
    """
    Decides whether a chat message may be processed and whether a denial
    should be answered.

    Empty allowlists allow everyone.
    """

    def __init__(
        self,
        bot: BotIdentity,
        allowed_groups: Iterable[str] | None = None,
        allowed_user_ids: Iterable[str] | None = None,
        require_mention: bool = False,
    ):
        self.bot = bot
        self.allowed_groups = {str(g).strip() for g in (allowed_groups or []) if str(g).strip()}
        self.allowed_user_ids = {str(u).strip() for u in (allowed_user_ids or []) if str(u).strip()}
        self.require_mention = require_mention

    def is_group_allowed(self, msg: InboundMessage) -> bool:
        if not is_group_chat(msg):
            return True
        if not self.allowed_groups:
            return True
        return str(msg.chat_id) in self.allowed_groups

    def is_user_allowed(self, msg: InboundMessage) -> bool:
        if msg.system_event or not self.allowed_user_ids:
            return True
        return str(msg.sender_id) in self.allowed_user_ids

    def is_reply_to_bot(self, msg: InboundMessage) -> bool:
        return msg.reply_to_sender_id is not None and str(msg.reply_to_sender_id) == str(self.bot.id)

    def is_mentioned(self, msg: InboundMessage) -> bool:
        username = (self.bot.username or "").lstrip("@").lower()
        if not username:
            return False
        if any(m.lstrip("@").lower() == username for m in msg.mentions):
            return True
        handle = re.compile(rf"(?<![\w@])@{re.escape(username)}(?!\w)", re.IGNORECASE)
        return handle.search(msg.content or "") is not None

    def is_bot_mentioned(self, msg: InboundMessage) -> bool:
        return self.is_mentioned(msg) or self.is_reply_to_bot(msg)

    def is_reply_to_bot_without_mention(self, msg: InboundMessage) -> bool:
        return self.is_reply_to_bot(msg) and not self.is_mentioned(msg)

    def should_reply_access_denied(self, msg: InboundMessage) -> bool:
        """Only answer denials in groups when the bot was addressed, to avoid flooding."""
        if not is_group_chat(msg):
            return True
        return self.is_bot_mentioned(msg)

    def passes_mention_gate(self, msg: InboundMessage) -> bool:
        if msg.system_event or not self.require_mention or not is_group_chat(msg):
            return True
        return self.is_bot_mentioned(msg)
