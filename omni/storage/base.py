"""Uniform async key/value text store contract."""

from abc import ABC, abstractmethod


def join_appended(existing: str, text: str, separator: str = "\n") -> str:
    """Append ``text`` to ``existing``, adding ``separator`` unless it already ends in a newline."""
    if not existing:
        return text
    glue = "" if existing.endswith("\n") else separator
    return f"{existing}{glue}{text}"


class TextStore(ABC):
    """
    Abstract text store.

    Keys are slash-delimited logical paths (``workspaces/<id>/...``); each
    backend maps them onto its own physical storage.
    """

    name: str = "base"

    @abstractmethod
    async def get_text(self, key: str) -> str | None:
        """Return the stored text, or None if the key does not exist."""

    @abstractmethod
    async def put_text(self, key: str, text: str, content_type: str | None = None) -> None:
        """Create or replace the text at ``key``."""

    @abstractmethod
    async def append_text(self, key: str, text: str, separator: str = "\n") -> None:
        """Append to the text at ``key``, creating it if missing."""

    @abstractmethod
    async def list(self, prefix: str) -> list[str]:
        """List keys stored under ``prefix``."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete ``key``. Missing keys are not an error."""
