"""Bounded-concurrency mapping over async handlers."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Sequence, TypeVar

from loguru import logger

from omni.errors import HandlerFailure

T = TypeVar("T")
R = TypeVar("R")


async def map_with_concurrency(
    items: Sequence[T],
    limit: int,
    handler: Callable[[T], Awaitable[R]],
) -> list[R]:
    """
    Run ``handler`` over ``items`` with at most ``limit`` calls in flight.

    Results keep input order regardless of completion order. If a handler
    raises, workers stop pulling new items, in-flight calls finish, and a
    HandlerFailure for the first failing index is raised once every worker
    has been joined. Cancellation and other non-Exception errors are
    re-raised as-is, also only after the join.
    """
    total = len(items)
    if total == 0:
        return []

    concurrency = max(1, min(int(limit), total))
    results: list[R | None] = [None] * total
    failures: list[tuple[int, BaseException]] = []
    cursor = 0

    async def worker() -> None:
        nonlocal cursor
        while cursor < total and not failures:
            index = cursor
            cursor += 1
            try:
                results[index] = await handler(items[index])
            except BaseException as exc:
                failures.append((index, exc))

    await asyncio.gather(*(worker() for _ in range(concurrency)))

    if failures:
        for index, error in failures:
            if not isinstance(error, Exception):
                logger.debug(f"map_with_concurrency interrupted at item {index}: {error!r}")
                raise error
        index, error = min(failures, key=lambda f: f[0])
        logger.debug(f"map_with_concurrency aborted at item {index}: {error}")
        raise HandlerFailure(index, error) from error
    return results  # type: ignore[return-value]
