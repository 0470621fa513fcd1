"""AsyncResult: a Result that has not arrived yet.

Wraps an awaitable of Result so the usual combinators can be chained
before awaiting:

    name = await (
        AsyncResult(fetch_user(1))
        .aand_then(validate_user)
        .amap(lambda user: user.name)
    )
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Coroutine, Generator
from typing import Any

import anyio

from klaw_match.types.result import Err, Ok, Result

__all__ = ['AsyncResult']


class AsyncResult[T, E]:
    """Lazy, awaitable Result pipeline.

    Each combinator returns a new AsyncResult; nothing runs until the chain
    is awaited. Wrapping a bare coroutine makes the pipeline single-shot
    (a second await raises RuntimeError); wrap a Task to await repeatedly.
    """

    __slots__ = ('_awaitable',)

    def __init__(self, awaitable: Awaitable[Result[T, E]]) -> None:
        self._awaitable = awaitable

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        return self._awaitable.__await__()

    @classmethod
    def from_ok(cls, value: T) -> AsyncResult[T, E]:
        return cls.from_result(Ok(value))

    @classmethod
    def from_err(cls, error: E) -> AsyncResult[T, E]:
        return cls.from_result(Err(error))

    @classmethod
    def from_result(cls, result: Result[T, E]) -> AsyncResult[T, E]:
        """Lift a Result that is already available."""

        async def _ready() -> Result[T, E]:
            return result

        return cls(_ready())

    def _then[U, F](
        self,
        step: Callable[[Result[T, E]], Result[U, F] | Awaitable[Result[U, F]]],
    ) -> AsyncResult[U, F]:
        """Apply step to the settled Result, awaiting it if it is async."""

        async def _run() -> Result[U, F]:
            out = step(await self._awaitable)
            if inspect.isawaitable(out):
                out = await out
            return out

        return AsyncResult(_run())

    def amap[U](self, f: Callable[[T], U]) -> AsyncResult[U, E]:
        return self._then(lambda r: r.map(f))

    def amap_err[F](self, f: Callable[[E], F]) -> AsyncResult[T, F]:
        return self._then(lambda r: r.map_err(f))

    def aand_then[U](self, f: Callable[[T], Result[U, E]]) -> AsyncResult[U, E]:
        return self._then(lambda r: r.and_then(f))

    def aand_then_async[U](self, f: Callable[[T], Awaitable[Result[U, E]]]) -> AsyncResult[U, E]:
        """Continue with an async step on Ok.

        Example:
            ```python
            async def load(id: int) -> Result[dict, str]:
                return Ok({'id': id})

            result = await AsyncResult.from_ok(1).aand_then_async(load)
            ```
        """
        return self._then(lambda r: r.and_then_async(f))

    def aor_else[F](self, f: Callable[[E], Result[T, F]]) -> AsyncResult[T, F]:
        return self._then(lambda r: r.or_else(f))

    def aor_else_async[F](self, f: Callable[[E], Awaitable[Result[T, F]]]) -> AsyncResult[T, F]:
        """Recover from Err with an async step."""
        return self._then(lambda r: r.or_else_async(f))

    def aunwrap_or(self, default: T) -> Coroutine[Any, Any, T]:
        """Coroutine resolving to the value, or default for Err."""

        async def _value() -> T:
            return (await self._awaitable).unwrap_or(default)

        return _value()

    def azip[U](self, other: AsyncResult[U, E]) -> AsyncResult[tuple[T, U], E]:
        """Settle both sides concurrently, then pair their values.

        With two Errs, the one from self is returned.
        """

        async def _both() -> Result[tuple[T, U], E]:
            left: list[Result[T, E]] = []
            right: list[Result[U, E]] = []

            async def _collect(into: list[Any], awaitable: Awaitable[Any]) -> None:
                into.append(await awaitable)

            async with anyio.create_task_group() as tg:
                tg.start_soon(_collect, left, self._awaitable)
                tg.start_soon(_collect, right, other._awaitable)

            return left[0].zip(right[0])

        return AsyncResult(_both())

    def __repr__(self) -> str:
        return f'AsyncResult({self._awaitable!r})'
