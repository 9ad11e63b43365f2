"""Session history helpers."""

from omni.session.history import (
    HistoryMessage,
    append_history_message,
    build_session_key,
    clear_history_messages,
    format_history_for_prompt,
    load_history_messages,
)

__all__ = [
    "HistoryMessage",
    "append_history_message",
    "build_session_key",
    "clear_history_messages",
    "format_history_for_prompt",
    "load_history_messages",
]
