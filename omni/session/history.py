"""JSON-lines conversation history kept in a text store."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal

from loguru import logger

from omni.storage.base import TextStore
from omni.storage.paths import session_history_key


@dataclass(frozen=True)
class HistoryMessage:
    timestamp: str
    role: Literal["user", "assistant"]
    text: str

    def to_json(self) -> str:
        return json.dumps(
            {"timestamp": self.timestamp, "role": self.role, "text": self.text},
            ensure_ascii=False,
        )

    @classmethod
    def from_dict(cls, data: Any) -> "HistoryMessage | None":
        if not isinstance(data, dict):
            return None
        role = data.get("role")
        text = data.get("text")
        timestamp = data.get("timestamp")
        if role not in ("user", "assistant") or not text or not timestamp:
            return None
        return cls(timestamp=str(timestamp), role=role, text=str(text))


def build_session_key(
    channel: str,
    chat_id: str,
    chat_type: str | None = None,
    topic: str | None = None,
) -> str:
    channel_part = str(channel or "").strip() or "unknown"
    type_part = str(chat_type or "").strip() or "unknown"
    chat_part = str(chat_id or "").strip() or "unknown"
    topic_part = str(topic or "").strip()
    if topic_part:
        return f"{channel_part}:{type_part}:{chat_part}:{topic_part}"
    return f"{channel_part}:{type_part}:{chat_part}"


async def append_history_message(
    store: TextStore,
    workspace_id: str,
    session_key: str,
    message: HistoryMessage,
) -> None:
    key = session_history_key(workspace_id, session_key)
    await store.append_text(key, message.to_json(), separator="\n")


async def load_history_messages(
    store: TextStore,
    workspace_id: str,
    session_key: str,
    limit: int = 0,
) -> list[HistoryMessage]:
    """Load stored messages, skipping malformed lines. ``limit <= 0`` returns everything."""
    key = session_history_key(workspace_id, session_key)
    raw = await store.get_text(key)
    if not raw:
        return []
    messages: list[HistoryMessage] = []
    skipped = 0
    for line in raw.strip().splitlines():
        if not line.strip():
            continue
        try:
            parsed = HistoryMessage.from_dict(json.loads(line))
        except json.JSONDecodeError:
            parsed = None
        if parsed is None:
            skipped += 1
            continue
        messages.append(parsed)
    if skipped:
        logger.debug(f"Skipped {skipped} malformed history lines in {key}")
    if limit <= 0:
        return messages
    return messages[-limit:]


async def clear_history_messages(store: TextStore, workspace_id: str, session_key: str) -> None:
    await store.delete(session_history_key(workspace_id, session_key))


def format_history_for_prompt(messages: list[HistoryMessage]) -> str:
    if not messages:
        return ""
    lines = ["Recent conversation:"]
    for msg in messages:
        role = "User" if msg.role == "user" else "Assistant"
        lines.append(f"{role}: {msg.text}")
    lines.append("")
    return "\n".join(lines)
