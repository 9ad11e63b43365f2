"""Small string helpers shared across modules."""

import re
from typing import Iterable

_UNSAFE_KEY_CHARS = re.compile(r"[^\w.-]+")


def parse_list(raw: str | Iterable[str] | None) -> list[str]:
    """Split a comma-separated string (or iterable) into trimmed, non-empty entries."""
    if not raw:
        return []
    parts = raw.split(",") if isinstance(raw, str) else list(raw)
    return [str(p).strip() for p in parts if str(p).strip()]


def sanitize_key_part(value: str | None) -> str:
    """Make a value safe to use as one segment of a storage key."""
    trimmed = str(value or "").strip()
    if not trimmed:
        return "unknown"
    return _UNSAFE_KEY_CHARS.sub("_", trimmed)
