"""Admin API: status, hook inspection and dry-run routing."""

from __future__ import annotations

import time
from typing import Any, Callable

from fastapi import APIRouter, Depends, FastAPI, HTTPException
from loguru import logger
from pydantic import BaseModel

from omni import __version__
from omni.access.gateway import build_admin_status_payload, require_gateway_token
from omni.config.schema import Config
from omni.errors import ConfigParseError
from omni.hooks.engine import HookEngine
from omni.hooks.types import HookEvent
from omni.tasks.router import route_message


class RouteRequest(BaseModel):
    text: str


def create_admin_router(
    *,
    config: Config,
    engine: HookEngine,
    auth: Callable | None = None,
    started_at: float | None = None,
) -> APIRouter:
    """Create the admin API router."""
    router = APIRouter()
    deps = [Depends(auth)] if auth else []
    boot = started_at if started_at is not None else time.monotonic()

    @router.get("/api/admin/status", dependencies=deps)
    async def admin_status() -> dict[str, Any]:
        payload = build_admin_status_payload(
            env=config.status_env(),
            uptime_seconds=round(time.monotonic() - boot, 3),
        )
        payload["hooks"] = {"loaded": len(engine.hooks), "path": str(config.hooks_path)}
        return payload

    @router.get("/api/hooks", dependencies=deps)
    async def list_hooks() -> list[dict[str, Any]]:
        return [hook.model_dump(by_alias=True, exclude_none=True) for hook in engine.hooks]

    @router.post("/api/hooks/dispatch", dependencies=deps)
    async def dispatch_preview(event: HookEvent) -> dict[str, Any]:
        actions = engine.dispatch(event)
        return {
            "event": event.event,
            "actions": [a.model_dump(by_alias=True, exclude_none=True) for a in actions],
        }

    @router.post("/api/hooks/reload", dependencies=deps)
    async def reload_hooks() -> dict[str, Any]:
        try:
            hooks = engine.load_file(config.hooks_path)
        except ConfigParseError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return {"loaded": len(hooks)}

    @router.post("/api/tasks/route", dependencies=deps)
    async def route_preview(body: RouteRequest) -> dict[str, Any]:
        text, decision = route_message(body.text, config.tasks)
        return {
            "mode": decision.mode,
            "reason": decision.reason,
            "tags": list(decision.tags),
            "text": text,
        }

    return router


def create_app(config: Config, engine: HookEngine | None = None) -> FastAPI:
    """Build the admin FastAPI app; every route requires the gateway token."""
    if engine is None:
        engine = HookEngine()
        if config.hooks.enabled:
            try:
                engine.load_file(config.hooks_path)
            except ConfigParseError as exc:
                logger.error(f"Starting with no hooks: {exc}")
    app = FastAPI(title="omni admin", version=__version__)
    auth = require_gateway_token(
        config.gateway.token,
        allowlist=config.gateway.allowlist,
        trust_forwarded_for=config.gateway.trust_forwarded_for,
    )
    app.include_router(create_admin_router(config=config, engine=engine, auth=auth))
    return app
