"""Composable filter matchers for hook dispatch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol

from omni.hooks.types import HookEvent, HookFilter


class FilterMatcher(Protocol):
    def matches(self, event: HookEvent) -> bool: ...


def _event_value(event: HookEvent, field: str) -> Any:
    value = getattr(event, field, None)
    if value is None and event.model_extra:
        value = event.model_extra.get(field)
    return value


@dataclass(frozen=True)
class ContainsMatcher:
    """Substring containment on a text field; a missing field counts as empty."""

    field: str
    needle: str

    def matches(self, event: HookEvent) -> bool:
        value = _event_value(event, self.field)
        return self.needle in (value if isinstance(value, str) else "")


@dataclass(frozen=True)
class EqualsMatcher:
    """Exact equality on a categorical field."""

    field: str
    expected: str

    def matches(self, event: HookEvent) -> bool:
        value = _event_value(event, self.field)
        return value is not None and str(value) == self.expected


@dataclass(frozen=True)
class RangeMatcher:
    """Inclusive numeric range; either bound may be open."""

    field: str
    minimum: float | None = None
    maximum: float | None = None

    def matches(self, event: HookEvent) -> bool:
        value = _event_value(event, self.field)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if self.minimum is not None and value < self.minimum:
            return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True


MatcherFactory = Callable[[HookFilter], list[FilterMatcher]]


def _equals(attr: str) -> MatcherFactory:
    def build(flt: HookFilter) -> list[FilterMatcher]:
        expected = getattr(flt, attr)
        return [EqualsMatcher(attr, expected)] if expected else []
    return build


def _contains(attr: str, field: str) -> MatcherFactory:
    def build(flt: HookFilter) -> list[FilterMatcher]:
        needle = getattr(flt, attr)
        return [ContainsMatcher(field, needle)] if needle else []
    return build


def _text_length(flt: HookFilter) -> list[FilterMatcher]:
    if flt.min_text_length is None and flt.max_text_length is None:
        return []
    return [RangeMatcher("text_length", flt.min_text_length, flt.max_text_length)]


FILTER_MATCHERS: list[MatcherFactory] = [
    _equals("chat_id"),
    _equals("chat_type"),
    _contains("text_includes", "text"),
    _equals("tool_name"),
    _text_length,
]


def build_matchers(flt: HookFilter | None) -> list[FilterMatcher]:
    """Translate a filter into the matchers for its present fields."""
    if flt is None:
        return []
    matchers: list[FilterMatcher] = []
    for factory in FILTER_MATCHERS:
        matchers.extend(factory(flt))
    return matchers


def passes_filter(flt: HookFilter | None, event: HookEvent) -> bool:
    return all(m.matches(event) for m in build_matchers(flt))
