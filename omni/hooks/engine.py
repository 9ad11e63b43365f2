"""Parse hook configuration and dispatch events to matching actions."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from loguru import logger
from pydantic import ValidationError

from omni.errors import ConfigParseError
from omni.hooks.matchers import passes_filter
from omni.hooks.types import HOOK_EVENTS, Hook, HookAction, HookEvent


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def parse_hooks_config(raw: str | None) -> list[Hook]:
    """
    Parse a JSON array of hook definitions.

    A missing or blank document means no hooks. Anything else that is not a
    well-formed array of valid hooks raises ConfigParseError.
    """
    if raw is None or not raw.strip():
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigParseError(f"Hooks config is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ConfigParseError(f"Hooks config must be a JSON array, got {type(data).__name__}")

    hooks: list[Hook] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ConfigParseError(f"Hook #{index} must be an object")
        for required in ("id", "event", "action"):
            if required not in item:
                raise ConfigParseError(f"Hook #{index} is missing '{required}'")
        try:
            hook = Hook.model_validate(item)
        except ValidationError as exc:
            raise ConfigParseError(f"Hook #{index} is invalid: {_format_validation_error(exc)}") from exc
        if hook.event not in HOOK_EVENTS:
            logger.debug(f"Hook '{hook.id}' listens for unrecognised event '{hook.event}'")
        hooks.append(hook)
    return hooks


def dispatch_hooks(hooks: Iterable[Hook], event: HookEvent | dict[str, Any]) -> list[HookAction]:
    """Return the actions of every enabled hook matching ``event``, in declaration order."""
    ctx = event if isinstance(event, HookEvent) else HookEvent.model_validate(event)
    actions: list[HookAction] = []
    for hook in hooks:
        if hook.enabled is False:
            continue
        if hook.event != ctx.event:
            continue
        if not passes_filter(hook.filter, ctx):
            continue
        actions.append(hook.action)
    return actions


class HookEngine:
    """Holds the active hook set. A failed reload keeps the previous set in place."""

    def __init__(self, hooks: Iterable[Hook] | None = None):
        self._hooks: tuple[Hook, ...] = tuple(hooks or ())

    @property
    def hooks(self) -> tuple[Hook, ...]:
        return self._hooks

    def load(self, raw: str | None) -> list[Hook]:
        try:
            hooks = parse_hooks_config(raw)
        except ConfigParseError as exc:
            logger.warning(f"Keeping {len(self._hooks)} previously loaded hooks: {exc}")
            raise
        self._hooks = tuple(hooks)
        logger.info(f"Loaded {len(hooks)} hooks")
        return hooks

    def load_file(self, path: Path | str) -> list[Hook]:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            logger.debug(f"No hooks file at {config_path}")
            return self.load(None)
        return self.load(config_path.read_text(encoding="utf-8"))

    def dispatch(self, event: HookEvent | dict[str, Any]) -> list[HookAction]:
        return dispatch_hooks(self._hooks, event)
