"""Fixed-width concurrent batches with a pause between groups."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def run_in_batches(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    batch_size: int,
    delay: float = 0.0,
) -> List[R]:
    """Run ``worker`` over ``items`` ``batch_size`` at a time, preserving order.

    Every call in a batch starts together and the whole batch finishes before
    the next one starts. ``delay`` seconds are slept between batches, never
    after the last one. Worker exceptions propagate.
    """

    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    results: List[R] = []
    for start in range(0, len(items), batch_size):
        if start and delay > 0:
            await asyncio.sleep(delay)
        batch = items[start : start + batch_size]
        results.extend(await asyncio.gather(*(worker(item) for item in batch)))
    return results


__all__ = ["run_in_batches"]
