"""In-process text store, used in tests and single-process deployments."""

from omni.storage.base import TextStore, join_appended


class MemoryTextStore(TextStore):
    name = "memory"

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})
        self.content_types: dict[str, str] = {}

    async def get_text(self, key: str) -> str | None:
        return self._data.get(key)

    async def put_text(self, key: str, text: str, content_type: str | None = None) -> None:
        self._data[key] = text
        if content_type:
            self.content_types[key] = content_type

    async def append_text(self, key: str, text: str, separator: str = "\n") -> None:
        self._data[key] = join_appended(self._data.get(key, ""), text, separator)

    async def list(self, prefix: str) -> list[str]:
        return sorted(k for k in self._data if k.startswith(prefix))

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
        self.content_types.pop(key, None)
