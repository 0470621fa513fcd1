"""Option: Some[T] | Nothing, a value that may be absent.

``Some(None)`` is a present value. Absence is spelled ``Nothing`` and is
a singleton, so ``opt is Nothing`` is a valid check.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, NoReturn, TypeIs

import msgspec

from klaw_match.errors import UnwrappedAbsent

if TYPE_CHECKING:
    from klaw_match.types.result import Err, Ok

__all__ = ['Nothing', 'NothingType', 'Option', 'Some', 'nothing', 'some']


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """A present ``value``.

    Examples:
        >>> Some(3).map(str)
        Some(value='3')
        >>> Some(3).filter(lambda v: v > 5)
        NothingType()
    """

    value: T

    def is_some(self) -> TypeIs[Some[T]]:
        """Always True; narrows the static type to Some."""
        return True

    def is_none(self) -> TypeIs[NothingType]:
        return False

    # --- extraction ---

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value

    def unwrap_or_else(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        return self.value

    def expect(self, _msg: str) -> T:
        return self.value

    # --- transformation ---

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        """Some(f(value)); a None result stays present."""
        return Some(f(self.value))

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:  # noqa: ARG002
        return f(self.value)

    def map_or_else[U](self, default: Callable[[], U], f: Callable[[T], U]) -> U:  # noqa: ARG002
        return f(self.value)

    def filter(self, predicate: Callable[[T], bool]) -> Some[T] | NothingType:
        """Keep the value only if predicate(value) holds."""
        if predicate(self.value):
            return self
        return Nothing

    # --- chaining ---

    def and_then[U](self, f: Callable[[T], Some[U] | NothingType]) -> Some[U] | NothingType:
        """Continue with f(value), which may itself be absent."""
        return f(self.value)

    def or_(self, _other: Some[T] | NothingType) -> Some[T]:
        return self

    def or_else(self, _f: Callable[[], Some[T] | NothingType]) -> Some[T]:
        return self

    def and_[U](self, other: Some[U] | NothingType) -> Some[U] | NothingType:
        return other

    # --- conversion and combination ---

    def ok_or[E](self, _err: E) -> Ok[T]:
        """Ok(value); the error argument is unused."""
        from klaw_match.types.result import Ok

        return Ok(self.value)

    def ok_or_else[E](self, _f: Callable[[], E]) -> Ok[T]:
        from klaw_match.types.result import Ok

        return Ok(self.value)

    def zip[U](self, other: Some[U] | NothingType) -> Some[tuple[T, U]] | NothingType:
        if isinstance(other, Some):
            return Some((self.value, other.value))
        return Nothing

    def flatten[U](self: Some[Some[U] | NothingType]) -> Some[U] | NothingType:
        """Drop one level of nesting."""
        return self.value  # type: ignore[return-value]

    def match[R](self, *, some: Callable[[T], R], nothing: Callable[[], R]) -> R:  # noqa: ARG002
        """Case analysis; returns some(value)."""
        return some(self.value)


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """The absent variant. Use the ``Nothing`` singleton.

    NothingType has no fields, so every instance compares and hashes equal.
    """

    def is_some(self) -> TypeIs[Some[object]]:
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Always True; narrows the static type to NothingType."""
        return True

    # --- extraction ---

    def unwrap(self) -> NoReturn:
        """Fail loudly.

        Raises:
            UnwrappedAbsent: Always.
        """
        raise UnwrappedAbsent

    def unwrap_or[T](self, default: T) -> T:
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """f(), called only here."""
        return f()

    def expect(self, msg: str) -> NoReturn:
        """Fail loudly with msg.

        Raises:
            UnwrappedAbsent: Always, with msg as its message.
        """
        raise UnwrappedAbsent(msg)

    # --- transformation ---

    def map[T, U](self, _f: Callable[[T], U]) -> NothingType:
        return self

    def map_or[T, U](self, default: U, _f: Callable[[T], U]) -> U:
        return default

    def map_or_else[T, U](self, default: Callable[[], U], _f: Callable[[T], U]) -> U:
        return default()

    def filter[T](self, _predicate: Callable[[T], bool]) -> NothingType:
        return self

    # --- chaining ---

    def and_then[T, U](self, _f: Callable[[T], Some[U] | NothingType]) -> NothingType:
        return self

    def or_[T](self, other: Some[T] | NothingType) -> Some[T] | NothingType:
        return other

    def or_else[T](self, f: Callable[[], Some[T] | NothingType]) -> Some[T] | NothingType:
        """Fall back to the Option produced by f()."""
        return f()

    def and_[T](self, _other: Some[T] | NothingType) -> NothingType:
        return self

    # --- conversion and combination ---

    def ok_or[E](self, err: E) -> Err[E]:
        """Err(err)."""
        from klaw_match.types.result import Err

        return Err(err)

    def ok_or_else[E](self, f: Callable[[], E]) -> Err[E]:
        """Err(f()); f runs only for Nothing."""
        from klaw_match.types.result import Err

        return Err(f())

    def zip[U](self, _other: Some[U] | NothingType) -> NothingType:
        return self

    def flatten(self) -> NothingType:
        return self

    def match[R](self, *, some: Callable[[object], R], nothing: Callable[[], R]) -> R:  # noqa: ARG002
        """Case analysis; returns nothing()."""
        return nothing()


Nothing: NothingType = NothingType()


type Option[T] = Some[T] | NothingType


def some[T](value: T) -> Some[T]:
    return Some(value)


def nothing() -> NothingType:
    """The Nothing singleton, for symmetry with some()."""
    return Nothing
