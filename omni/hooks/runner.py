"""Execute dispatched hook actions through registered handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from loguru import logger

from omni.hooks.engine import HookEngine
from omni.hooks.types import HookAction, HookEvent
from omni.utils.concurrency import map_with_concurrency

ActionHandler = Callable[[HookAction, HookEvent], Awaitable[None]]


@dataclass
class HookRunResult:
    """Result summary for a hook event run."""

    event: str
    matched: int = 0
    executed: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class HookRunner:
    """
    Dispatches an event through a HookEngine and hands each action to the
    handler registered for its ``type``.

    Handler failures are logged and collected on the result; they never
    stop the remaining actions.
    """

    def __init__(
        self,
        engine: HookEngine,
        handlers: dict[str, ActionHandler] | None = None,
        max_concurrency: int = 1,
    ):
        self.engine = engine
        self.handlers: dict[str, ActionHandler] = dict(handlers or {})
        self.max_concurrency = max(1, int(max_concurrency))

    def register(self, action_type: str, handler: ActionHandler) -> None:
        self.handlers[action_type] = handler

    async def run(self, event: HookEvent | dict[str, Any]) -> HookRunResult:
        ctx = event if isinstance(event, HookEvent) else HookEvent.model_validate(event)
        result = HookRunResult(event=ctx.event)
        actions = self.engine.dispatch(ctx)
        result.matched = len(actions)
        if not actions:
            return result

        async def execute(action: HookAction) -> str | None:
            handler = self.handlers.get(action.type)
            if handler is None:
                return f"No handler registered for action type '{action.type}'"
            try:
                await handler(action, ctx)
            except Exception as exc:
                msg = f"{ctx.event} hook action '{action.type}' failed: {exc}"
                logger.warning(msg)
                return msg
            return None

        outcomes = await map_with_concurrency(actions, self.max_concurrency, execute)
        for outcome in outcomes:
            if outcome is None:
                result.executed += 1
            else:
                result.errors.append(outcome)
        return result
