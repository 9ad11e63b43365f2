"""Declarative hook engine."""

from omni.hooks.engine import HookEngine, dispatch_hooks, parse_hooks_config
from omni.hooks.matchers import ContainsMatcher, EqualsMatcher, FilterMatcher, RangeMatcher, build_matchers
from omni.hooks.runner import HookRunner, HookRunResult
from omni.hooks.types import (
    HOOK_EVENTS,
    EnqueueTurnAction,
    Hook,
    HookAction,
    HookEvent,
    HookFilter,
    PassthroughAction,
    SpawnSubagentAction,
)

__all__ = [
    "HOOK_EVENTS",
    "ContainsMatcher",
    "EnqueueTurnAction",
    "EqualsMatcher",
    "FilterMatcher",
    "Hook",
    "HookAction",
    "HookEngine",
    "HookEvent",
    "HookFilter",
    "HookRunResult",
    "HookRunner",
    "PassthroughAction",
    "RangeMatcher",
    "SpawnSubagentAction",
    "build_matchers",
    "dispatch_hooks",
    "parse_hooks_config",
]
