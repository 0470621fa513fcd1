"""Result: Ok[T] | Err[E], an outcome that is either a value or an error.

Both variants implement the full method set, so code can call ``map``,
``and_then`` or ``match`` without first checking which one it holds.
Only ``unwrap`` and ``expect`` raise, and only on Err.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from klaw_match.errors import UnwrappedFailure

if TYPE_CHECKING:
    from klaw_match.types.option import Option

__all__ = ['Err', 'Ok', 'Result', 'err', 'ok']


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """A successful outcome carrying ``value``.

    Examples:
        >>> Ok(21).map(lambda x: x * 2)
        Ok(value=42)
        >>> Ok(21).and_then(lambda x: Err('too small') if x < 50 else Ok(x))
        Err(error='too small')
    """

    value: T

    # --- querying ---

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Always True; narrows the static type to Ok."""
        return True

    def is_err(self) -> TypeIs[Err[object]]:
        return False

    # --- extraction ---

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value

    def unwrap_or_else(self, f: Callable[[Any], T]) -> T:  # noqa: ARG002
        return self.value

    def expect(self, _msg: str) -> T:
        return self.value

    # --- transformation ---

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Wrap f(value) in a new Ok."""
        return Ok(f(self.value))

    def map_err[F](self, _f: Callable[[object], F]) -> Ok[T]:
        return self

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:  # noqa: ARG002
        """f(value), unwrapped."""
        return f(self.value)

    def map_or_else[U](self, default: Callable[[Any], U], f: Callable[[T], U]) -> U:  # noqa: ARG002
        return f(self.value)

    def inspect(self, f: Callable[[T], Any]) -> Ok[T]:
        """Run f on the value for its side effect; the result is discarded."""
        f(self.value)
        return self

    def inspect_err(self, _f: Callable[[Any], Any]) -> Ok[T]:
        return self

    # --- chaining ---

    def and_then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Continue with f(value), which decides the next outcome.

        A chain of and_then calls stops at the first Err it produces.
        """
        return f(self.value)

    def or_else[F](self, _f: Callable[[object], Ok[T] | Err[F]]) -> Ok[T]:
        return self

    async def and_then_async[U, E](self, f: Callable[[T], Awaitable[Ok[U] | Err[E]]]) -> Ok[U] | Err[E]:
        """Await f(value) and return the Result it produces."""
        return await f(self.value)

    async def or_else_async[F](self, _f: Callable[[object], Awaitable[Ok[T] | Err[F]]]) -> Ok[T]:
        """Resolves to self; f is never called."""
        return self

    def and_[U, E](self, other: Ok[U] | Err[E]) -> Ok[U] | Err[E]:
        return other

    def or_[F](self, _other: Ok[T] | Err[F]) -> Ok[T]:
        return self

    # --- conversion and combination ---

    def ok(self) -> Option[T]:
        """Some(value)."""
        from klaw_match.types.option import Some

        return Some(self.value)

    def err(self) -> Option[object]:
        """Nothing: there is no error to expose."""
        from klaw_match.types.option import Nothing

        return Nothing

    def zip[U, E](self, other: Ok[U] | Err[E]) -> Ok[tuple[T, U]] | Err[E]:
        """Pair this value with other's, or pass other's Err through."""
        if isinstance(other, Ok):
            return Ok((self.value, other.value))
        return other

    def flatten[U, E](self: Ok[Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Drop one level of nesting: Ok(Ok(x)) -> Ok(x), Ok(Err(e)) -> Err(e)."""
        return self.value  # type: ignore[return-value]

    def match[R](self, *, ok: Callable[[T], R], err: Callable[[Any], R]) -> R:  # noqa: ARG002
        """Case analysis; returns ok(value).

        Examples:
            >>> Ok(2).match(ok=lambda v: v * 10, err=lambda e: -1)
            20
        """
        return ok(self.value)


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """A failed outcome carrying ``error``.

    Any value can be an error: an exception, a string, an enum member.
    Transformations aimed at the success channel return this same instance.

    Examples:
        >>> Err('timeout').map(lambda x: x * 2)
        Err(error='timeout')
        >>> Err('timeout').unwrap_or_else(len)
        7
    """

    error: E

    # --- querying ---

    def is_ok(self) -> TypeIs[Ok[object]]:
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Always True; narrows the static type to Err."""
        return True

    # --- extraction ---

    def unwrap(self) -> NoReturn:
        """Fail loudly.

        Raises:
            UnwrappedFailure: Always; its ``error`` attribute holds this
                Err's error.
        """
        raise UnwrappedFailure(self.error)

    def unwrap_or[T](self, default: T) -> T:
        return default

    def unwrap_or_else[T](self, f: Callable[[E], T]) -> T:
        """Fallback computed from the error."""
        return f(self.error)

    def expect(self, msg: str) -> NoReturn:
        """Fail loudly with context.

        Raises:
            UnwrappedFailure: Always, reading ``"{msg}: {error!r}"``.
        """
        raise UnwrappedFailure(self.error, msg)

    # --- transformation ---

    def map[T, U](self, _f: Callable[[T], U]) -> Err[E]:
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Wrap f(error) in a new Err."""
        return Err(f(self.error))

    def map_or[T, U](self, default: U, _f: Callable[[T], U]) -> U:
        return default

    def map_or_else[T, U](self, default: Callable[[E], U], _f: Callable[[T], U]) -> U:
        """default(error)."""
        return default(self.error)

    def inspect(self, _f: Callable[[Any], Any]) -> Err[E]:
        return self

    def inspect_err(self, f: Callable[[E], Any]) -> Err[E]:
        """Run f on the error for its side effect, e.g. logging."""
        f(self.error)
        return self

    # --- chaining ---

    def and_then[T, U](self, _f: Callable[[T], Ok[U] | Err[E]]) -> Err[E]:
        return self

    def or_else[T, F](self, f: Callable[[E], Ok[T] | Err[F]]) -> Ok[T] | Err[F]:
        """Recover: f(error) decides the next outcome."""
        return f(self.error)

    async def and_then_async[T, U](self, _f: Callable[[T], Awaitable[Ok[U] | Err[E]]]) -> Err[E]:
        """Resolves to self; f is never called."""
        return self

    async def or_else_async[T, F](self, f: Callable[[E], Awaitable[Ok[T] | Err[F]]]) -> Ok[T] | Err[F]:
        """Await f(error) and return the Result it produces."""
        return await f(self.error)

    def and_[U](self, _other: Ok[U] | Err[E]) -> Err[E]:
        return self

    def or_[T, F](self, other: Ok[T] | Err[F]) -> Ok[T] | Err[F]:
        return other

    # --- conversion and combination ---

    def ok(self) -> Option[object]:
        """Nothing: there is no value to expose."""
        from klaw_match.types.option import Nothing

        return Nothing

    def err(self) -> Option[E]:
        """Some(error)."""
        from klaw_match.types.option import Some

        return Some(self.error)

    def zip[U](self, _other: Ok[U] | Err[E]) -> Err[E]:
        return self

    def flatten(self) -> Err[E]:
        return self

    def match[R](self, *, ok: Callable[[Any], R], err: Callable[[E], R]) -> R:  # noqa: ARG002
        """Case analysis; returns err(error)."""
        return err(self.error)


type Result[T, E = Exception] = Ok[T] | Err[E]


def ok[T](value: T) -> Ok[T]:
    return Ok(value)


def err[E](error: E) -> Err[E]:
    return Err(error)
