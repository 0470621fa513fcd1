"""Convert between awaitables and Results."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable

import aiologic
import anyio

from klaw_match.types.result import Err, Ok, Result
from klaw_match.utils import all_ok

__all__ = [
    'async_all_ok',
    'from_awaitable',
    'unwrap_awaitable',
    'unwrap_awaitable_or',
]


async def from_awaitable[T, E](
    awaitable: Awaitable[T],
    error_mapper: Callable[[Exception], E],
) -> Result[T, E]:
    """Await and wrap the value in Ok, mapping a raised Exception into Err.

    Cancellation and other BaseExceptions are not caught.

    Examples:
        >>> async def example():
        ...     return await from_awaitable(fetch(), lambda exc: str(exc))
    """
    try:
        value = await awaitable
    except Exception as exc:  # noqa: BLE001
        return Err(error_mapper(exc))
    return Ok(value)


async def unwrap_awaitable[T, E](awaitable: Awaitable[Result[T, E]]) -> T:
    """Await a Result and unwrap it.

    Raises:
        UnwrappedFailure: If the awaited Result is Err.
    """
    return (await awaitable).unwrap()


async def unwrap_awaitable_or[T, E](awaitable: Awaitable[Result[T, E]], default: T) -> T:
    """Await a Result and return its value, or default for Err."""
    return (await awaitable).unwrap_or(default)


async def async_all_ok[T, E](
    awaitables: Iterable[Awaitable[Result[T, E]]],
    *,
    limit: int | None = None,
) -> Result[list[T], E]:
    """Await all concurrently, then reduce like all_ok.

    The first Err by input position wins, regardless of completion order.
    Every awaitable runs to completion even when an earlier one failed.

    Args:
        awaitables: Producers of Results; materialized into a list up front.
        limit: Maximum number in flight at once. None means unlimited.
    """
    pending = list(awaitables)
    settled: list[Result[T, E] | None] = [None] * len(pending)
    limiter = aiologic.CapacityLimiter(limit) if limit is not None else None

    async def _settle(index: int, awaitable: Awaitable[Result[T, E]]) -> None:
        if limiter is None:
            settled[index] = await awaitable
            return
        async with limiter:
            settled[index] = await awaitable

    async with anyio.create_task_group() as tg:
        for index, awaitable in enumerate(pending):
            tg.start_soon(_settle, index, awaitable)

    return all_ok(result for result in settled if result is not None)
