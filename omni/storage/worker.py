"""Text store backed by the remote tool-service worker's storage API."""

from __future__ import annotations

import json
from typing import Any

import httpx
from loguru import logger

from omni.errors import StoreUnavailable
from omni.storage.base import TextStore

SECRET_HEADER = "x-omni-tool-secret"


class WorkerTextStore(TextStore):
    """
    Proxies every operation as a JSON POST to ``{base_url}/tool-storage/<op>``.

    Timeouts, transport errors and non-2xx responses raise StoreUnavailable.
    Retrying is left to the caller.
    """

    name = "worker"

    def __init__(
        self,
        base_url: str,
        secret: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.secret = secret
        self.timeout_seconds = max(0.1, float(timeout_seconds))
        self._transport = transport

    async def _call(self, op: str, key: str, body: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/tool-storage/{op}"
        headers = {"Content-Type": "application/json", SECRET_HEADER: self.secret}
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.post(url, headers=headers, content=json.dumps(body))
        except httpx.TimeoutException as exc:
            logger.warning(f"Worker store {op} timed out after {self.timeout_seconds}s: {key}")
            raise StoreUnavailable(op, key, "timeout") from exc
        except httpx.HTTPError as exc:
            raise StoreUnavailable(op, key, str(exc) or exc.__class__.__name__) from exc

        text = response.text
        if response.status_code >= 400:
            raise StoreUnavailable(op, key, f"worker_store_error:{response.status_code}:{text[:200]}")
        if not text.strip():
            return {}
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StoreUnavailable(op, key, "invalid JSON response") from exc
        return payload if isinstance(payload, dict) else {}

    async def get_text(self, key: str) -> str | None:
        payload = await self._call("get", key, {"key": key})
        value = payload.get("text")
        return value if isinstance(value, str) else None

    async def put_text(self, key: str, text: str, content_type: str | None = None) -> None:
        body: dict[str, Any] = {"key": key, "text": text}
        if content_type:
            body["contentType"] = content_type
        await self._call("put", key, body)

    async def append_text(self, key: str, text: str, separator: str = "\n") -> None:
        await self._call("append", key, {"key": key, "text": text, "separator": separator})

    async def list(self, prefix: str) -> list[str]:
        payload = await self._call("list", prefix, {"prefix": prefix})
        keys = payload.get("keys")
        return [str(k) for k in keys] if isinstance(keys, list) else []

    async def delete(self, key: str) -> None:
        await self._call("delete", key, {"key": key})
