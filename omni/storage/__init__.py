"""Text-store contract and backends."""

from __future__ import annotations

from typing import TYPE_CHECKING

from omni.storage.base import TextStore
from omni.storage.fs import FsTextStore
from omni.storage.memory import MemoryTextStore
from omni.storage.worker import WorkerTextStore

if TYPE_CHECKING:
    from omni.config.schema import StorageConfig

__all__ = ["TextStore", "FsTextStore", "MemoryTextStore", "WorkerTextStore", "create_text_store"]


def create_text_store(config: "StorageConfig") -> TextStore:
    """Build the backend selected by ``config.backend``."""
    if config.backend == "memory":
        return MemoryTextStore()
    if config.backend == "worker":
        if not config.worker_url:
            raise ValueError("storage.workerUrl is required for the worker backend")
        return WorkerTextStore(
            base_url=config.worker_url,
            secret=config.worker_secret,
            timeout_seconds=config.timeout_seconds,
        )
    return FsTextStore(config.base_dir)
