"""Bounded-concurrency mapping over a sequence of items."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

logger = logging.getLogger("codepush-cli")

T = TypeVar("T")
R = TypeVar("R")


async def promise_map(
    items: Sequence[T],
    mapper: Callable[[T], Awaitable[R]],
    concurrency: int,
) -> List[R]:
    """Apply ``mapper`` to every item with at most ``concurrency`` calls in flight.

    A fixed pool of ``min(concurrency, len(items))`` workers drains a shared
    cursor over the item indices. Each worker claims the next index, awaits
    the mapper for it and then claims another, so results land at the index
    of their input regardless of completion order.

    Args:
        items: The inputs to map.
        mapper: Async callable applied to each input.
        concurrency: Maximum number of mapper calls running at once (>= 1).

    Returns:
        List of results in input order.

    Raises:
        ValueError: If ``concurrency`` is not a positive integer.
        RuntimeError: If a mapper call was cancelled, so its result is missing.
        Exception: The first exception raised by ``mapper``, by completion
            order. Once a failure is seen no further items are started;
            calls already in flight finish in the background.

    Cancelling ``promise_map`` itself cancels every worker.
    """
    if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
        raise ValueError(f"concurrency must be a positive integer, got {concurrency!r}")

    if not items:
        return []

    results: List[Optional[R]] = [None] * len(items)
    errors: List[BaseException] = []
    cursor = 0

    async def _worker() -> None:
        nonlocal cursor
        while not errors and cursor < len(items):
            # No await between the check and the increment: claims are unique.
            index = cursor
            cursor += 1
            try:
                results[index] = await mapper(items[index])
            except Exception as e:
                errors.append(e)
                raise
            except asyncio.CancelledError:
                errors.append(
                    RuntimeError(f"Mapper call for item {index} was cancelled")
                )
                raise

    def _consume(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"Mapper failed: {task.exception()!r}")

    workers = []
    for _ in range(min(concurrency, len(items))):
        task = asyncio.ensure_future(_worker())
        task.add_done_callback(_consume)
        workers.append(task)

    pending = set(workers)
    try:
        while pending and not errors:
            _, pending = await asyncio.wait(
                pending, return_when=asyncio.FIRST_COMPLETED
            )
    except asyncio.CancelledError:
        for task in workers:
            task.cancel()
        raise

    if errors:
        raise errors[0]

    return results  # type: ignore[return-value]
