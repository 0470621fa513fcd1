"""Bridges between containers and plain Python: exceptions, None, sequences.

- safe / try_catch: turn raised exceptions into Err
- all_ok / any_ok: reduce a sequence of Results
- from_nullable / to_nullable, from_sequence / to_list: Option conversions
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, overload

import wrapt

from klaw_match.types.option import Nothing, NothingType, Option, Some
from klaw_match.types.result import Err, Ok, Result

__all__ = [
    'all_ok',
    'any_ok',
    'from_nullable',
    'from_sequence',
    'safe',
    'to_list',
    'to_nullable',
    'try_catch',
]


@overload
def safe[**P, T](
    func: Callable[P, T],
) -> Callable[P, Ok[T] | Err[Exception]]: ...


@overload
def safe[**P, T, E: BaseException](
    func: None = None,
    *,
    exceptions: tuple[type[E], ...] | None = None,
) -> Callable[[Callable[P, T]], Callable[P, Ok[T] | Err[E]]]: ...


def safe[**P, T](
    func: Callable[P, T] | None = None,
    *,
    exceptions: tuple[type[Any], ...] | None = None,
) -> Any:
    """Make a function report failure as Err instead of raising.

    Bare ``@safe`` captures any Exception; ``@safe(exceptions=(...))``
    captures only the listed types and lets everything else propagate.
    BaseExceptions such as KeyboardInterrupt are never captured.

    Example:
        ```python
        @safe
        def parse(raw: str) -> int:
            return int(raw)

        parse('12')   # Ok(value=12)
        parse('x')    # Err(error=ValueError(...))

        @safe(exceptions=(KeyError,))
        def lookup(table: dict, key: str) -> int:
            return table[key]
        ```
    """
    captured = exceptions if exceptions is not None else (Exception,)

    @wrapt.decorator
    def capture(
        wrapped: Callable[P, T],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Ok[T] | Err[Any]:
        try:
            value = wrapped(*args, **kwargs)
        except captured as exc:
            return Err(exc)
        return Ok(value)

    return capture if func is None else capture(func)


def try_catch[T](fn: Callable[[], T]) -> Result[T, Exception]:
    """Call fn now and capture its outcome.

    Examples:
        >>> try_catch(lambda: 1 + 1)
        Ok(value=2)
        >>> try_catch(lambda: int('x')).is_err()
        True
    """
    return safe(fn)()


def all_ok[T, E](results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Ok(list of values) if every Result is Ok, else the first Err.

    Stops consuming the iterable at that Err.

    Examples:
        >>> all_ok([Ok(1), Ok(2), Ok(3)])
        Ok(value=[1, 2, 3])
        >>> all_ok([Ok(1), Err('e'), Ok(3)])
        Err(error='e')
    """
    collected: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        collected.append(result.value)
    return Ok(collected)


def any_ok[T, E](results: Iterable[Result[T, E]]) -> Result[T, E | None]:
    """Return the first Ok, otherwise the last Err.

    An empty input has no error to report and gives Err(None).

    Examples:
        >>> any_ok([Err('e1'), Ok(42), Err('e2')])
        Ok(value=42)
        >>> any_ok([Err('e1'), Err('e2')])
        Err(error='e2')
    """
    last: Err[E] | Err[None] = Err(None)
    for result in results:
        if isinstance(result, Ok):
            return result
        last = result
    return last


def from_nullable[T](value: T | None) -> Option[T]:
    """Some(value) unless value is None."""
    return Nothing if value is None else Some(value)


def to_nullable[T](option: Option[T]) -> T | None:
    """The contained value, or None for Nothing."""
    if isinstance(option, NothingType):
        return None
    return option.value


def from_sequence[T](items: Sequence[T]) -> Option[Sequence[T]]:
    """Some(items) if items is non-empty, else Nothing."""
    return Some(items) if len(items) > 0 else Nothing


def to_list[T](option: Option[T]) -> list[T]:
    """A one-element list for Some, an empty list for Nothing."""
    if isinstance(option, NothingType):
        return []
    return [option.value]
