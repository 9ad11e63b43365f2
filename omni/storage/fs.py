"""Filesystem-backed text store."""

from pathlib import Path

from loguru import logger

from omni.storage.base import TextStore, join_appended


class FsTextStore(TextStore):
    """Stores each key as a UTF-8 file below ``base_dir``."""

    name = "fs"

    def __init__(self, base_dir: Path | str):
        self.base_dir = Path(base_dir).expanduser().resolve()

    def _resolve(self, key: str) -> Path:
        path = (self.base_dir / key.lstrip("/")).resolve()
        if path != self.base_dir and self.base_dir not in path.parents:
            raise ValueError(f"Key escapes store root: {key}")
        return path

    async def get_text(self, key: str) -> str | None:
        path = self._resolve(key)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            logger.warning(f"fs store: {key} is not valid UTF-8, treating as missing: {exc}")
            return None

    async def put_text(self, key: str, text: str, content_type: str | None = None) -> None:
        path = self._resolve(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    async def append_text(self, key: str, text: str, separator: str = "\n") -> None:
        path = self._resolve(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        existing = path.read_text(encoding="utf-8") if path.is_file() else ""
        path.write_text(join_appended(existing, text, separator), encoding="utf-8")

    async def list(self, prefix: str) -> list[str]:
        root = self._resolve(prefix)
        if root.is_file():
            return [root.relative_to(self.base_dir).as_posix()]
        if not root.is_dir():
            return []
        return sorted(
            p.relative_to(self.base_dir).as_posix()
            for p in root.rglob("*")
            if p.is_file()
        )

    async def delete(self, key: str) -> None:
        path = self._resolve(key)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug(f"fs store delete: {key} already missing")
