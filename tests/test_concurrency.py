import asyncio

import pytest

from omni.errors import HandlerFailure
from omni.utils.concurrency import map_with_concurrency


async def test_map_with_concurrency_preserves_input_order() -> None:
    async def handler(value: int) -> int:
        await asyncio.sleep(value * 0.005)
        return value * 2

    result = await map_with_concurrency([3, 1, 2], 2, handler)
    assert result == [6, 2, 4]


async def test_map_with_concurrency_respects_limit() -> None:
    active = 0
    peak = 0

    async def handler(_value: int) -> None:
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0.01)
        active -= 1

    await map_with_concurrency([1, 2, 3, 4, 5], 2, handler)
    assert peak == 2


async def test_map_with_concurrency_never_exceeds_item_count() -> None:
    active = 0
    peak = 0

    async def handler(_value: int) -> None:
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0.01)
        active -= 1

    await map_with_concurrency([1, 2], 10, handler)
    assert peak == 2


async def test_map_with_concurrency_empty_input_skips_handler() -> None:
    calls: list[int] = []

    async def handler(value: int) -> int:
        calls.append(value)
        return value

    assert await map_with_concurrency([], 4, handler) == []
    assert calls == []


async def test_map_with_concurrency_treats_non_positive_limit_as_one() -> None:
    active = 0
    peak = 0

    async def handler(value: int) -> int:
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0)
        active -= 1
        return value

    assert await map_with_concurrency([1, 2, 3], 0, handler) == [1, 2, 3]
    assert peak == 1


async def test_map_with_concurrency_joins_workers_before_raising() -> None:
    finished: list[int] = []
    started: list[int] = []

    async def handler(value: int) -> int:
        started.append(value)
        if value == 1:
            await asyncio.sleep(0.001)
            raise RuntimeError("boom")
        await asyncio.sleep(0.02)
        finished.append(value)
        return value

    with pytest.raises(HandlerFailure) as exc_info:
        await map_with_concurrency([1, 2, 3, 4], 2, handler)

    assert exc_info.value.index == 0
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    # The sibling that was already running completed; nothing new was started.
    assert finished == [2]
    assert started == [1, 2]


async def test_map_with_concurrency_joins_workers_on_cancellation() -> None:
    finished: list[int] = []

    async def handler(value: int) -> int:
        if value == 0:
            await asyncio.sleep(0.001)
            raise asyncio.CancelledError()
        await asyncio.sleep(0.05)
        finished.append(value)
        return value

    with pytest.raises(asyncio.CancelledError):
        await map_with_concurrency([0, 1], 2, handler)

    # The sibling ran to completion before the runner returned.
    assert finished == [1]
