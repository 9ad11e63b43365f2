"""Inline vs background classification for inbound messages."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Literal

if TYPE_CHECKING:
    from omni.config.schema import TasksConfig

TaskMode = Literal["inline", "background"]

_TASK_PREFIX_RE = re.compile(r"^\s*(?:/task(?:@\w+)?(?=\s|$)|task:|background:|bg:)", re.IGNORECASE)
_NOW_PREFIX_RE = re.compile(r"^\s*(?:/now(?:@\w+)?(?=\s|$)|now:|inline:)", re.IGNORECASE)
_URL_RE = re.compile(r"https?://\S+", re.IGNORECASE)
_LONG_JOB_RE = re.compile(
    r"\b(crawl|scrape|firecrawl|export|csv|report|batch|scan|audit|benchmark|analy[sz]e)\b",
    re.IGNORECASE,
)
_LONG_JOB_RU_RE = re.compile(
    r"(выгруз|csv|таблиц|отчет|сканир|проверь все|найди все|проанализируй все)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class TaskOverride:
    mode: TaskMode
    text: str


@dataclass(frozen=True)
class TaskDecision:
    mode: TaskMode
    reason: str | None = None
    tags: tuple[str, ...] = ()

    @property
    def is_background(self) -> bool:
        return self.mode == "background"


def extract_task_override(text: str) -> TaskOverride | None:
    """Strip an explicit ``/task`` or ``now:``-style prefix and return the forced mode."""
    value = str(text or "")
    match = _TASK_PREFIX_RE.match(value)
    if match:
        return TaskOverride(mode="background", text=value[match.end():].strip())
    match = _NOW_PREFIX_RE.match(value)
    if match:
        return TaskOverride(mode="inline", text=value[match.end():].strip())
    return None


def count_urls(text: str) -> int:
    return len(_URL_RE.findall(text or ""))


def decide_task_mode(
    text: str,
    enabled: bool,
    url_threshold: int,
    min_chars: int,
    keywords: Iterable[str] | None = None,
    builtin_keywords: bool = False,
) -> TaskDecision:
    """
    Classify a message by heuristics.

    Background when the URL count reaches ``url_threshold`` or the trimmed
    text length reaches ``min_chars`` (both inclusive), or when an enabled
    keyword list matches.
    """
    if not enabled:
        return TaskDecision(mode="inline", reason="disabled")
    trimmed = str(text or "").strip()
    if not trimmed:
        return TaskDecision(mode="inline", reason="empty")

    tags: list[str] = []
    if count_urls(trimmed) >= url_threshold:
        tags.append("many_urls")
    if len(trimmed) >= min_chars:
        tags.append("long_prompt")
    if builtin_keywords and (_LONG_JOB_RE.search(trimmed) or _LONG_JOB_RU_RE.search(trimmed)):
        tags.append("keywords")
    lowered = trimmed.lower()
    if any(k.strip() and k.strip().lower() in lowered for k in (keywords or [])):
        tags.append("custom_keywords")

    if tags:
        return TaskDecision(mode="background", reason="heuristic", tags=tuple(tags))
    return TaskDecision(mode="inline", reason="fast")


def route_message(text: str, settings: "TasksConfig") -> tuple[str, TaskDecision]:
    """Apply an explicit override if present, otherwise the heuristics. Returns (effective_text, decision)."""
    override = extract_task_override(text)
    if override is not None:
        if not settings.enabled:
            return override.text, TaskDecision(mode="inline", reason="disabled")
        return override.text, TaskDecision(mode=override.mode, reason="override", tags=("override",))
    effective = str(text or "").strip()
    decision = decide_task_mode(
        effective,
        enabled=settings.enabled,
        url_threshold=settings.url_threshold,
        min_chars=settings.min_chars,
        keywords=settings.keywords,
        builtin_keywords=settings.builtin_keywords,
    )
    return effective, decision
