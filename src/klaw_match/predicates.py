"""Type guards and the predicate registry handed to match clauses.

Every clause predicate receives the subject and a PredicateRegistry, so the
common checks are available without imports:

    match(value).when(lambda v, p: p.is_number(v), double).default(zero)

Container shape checks (is_ok, is_err, is_some, is_nothing) test against the
closed set of variant classes rather than probing for methods, so an
arbitrary object with an ``is_ok`` method is not mistaken for a Result.
"""

from __future__ import annotations

import datetime
import decimal
import fractions
import inspect
import re
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from klaw_match.types.option import NothingType, Some
from klaw_match.types.result import Err, Ok

__all__ = [
    'PredicateRegistry',
    'is_awaitable',
    'is_boolean',
    'is_date',
    'is_empty',
    'is_err',
    'is_falsy',
    'is_function',
    'is_list',
    'is_nil',
    'is_nothing',
    'is_number',
    'is_object',
    'is_ok',
    'is_regex',
    'is_some',
    'is_string',
    'is_truthy',
    'predicates',
]

type Guard = Callable[[Any], bool]

_NUMBER_TYPES = (int, float, complex, decimal.Decimal, fractions.Fraction)
_PRIMITIVE_TYPES = (str, bytes, bool, *_NUMBER_TYPES)
_SIZED_EMPTY_TYPES = (str, bytes, list, tuple, dict, set, frozenset)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_number(value: Any) -> bool:
    """True for numeric values; bool is excluded even though it subclasses int."""
    return isinstance(value, _NUMBER_TYPES) and not isinstance(value, bool)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_nil(value: Any) -> bool:
    return value is None


def is_list(value: Any) -> bool:
    return isinstance(value, list | tuple)


def is_function(value: Any) -> bool:
    """True for callables that are not classes."""
    return callable(value) and not inspect.isclass(value)


def is_object(value: Any) -> bool:
    """True for non-None values that are neither primitive scalars nor callables."""
    return value is not None and not isinstance(value, _PRIMITIVE_TYPES) and not callable(value)


def is_awaitable(value: Any) -> bool:
    return inspect.isawaitable(value)


def is_date(value: Any) -> bool:
    return isinstance(value, datetime.date)


def is_regex(value: Any) -> bool:
    return isinstance(value, re.Pattern)


def is_truthy(value: Any) -> bool:
    return bool(value)


def is_falsy(value: Any) -> bool:
    return not value


def is_empty(value: Any) -> bool:
    """True for None and for empty strings, bytes and builtin collections."""
    if isinstance(value, _SIZED_EMPTY_TYPES):
        return len(value) == 0
    return value is None


def is_ok(value: Any) -> bool:
    return isinstance(value, Ok)


def is_err(value: Any) -> bool:
    return isinstance(value, Err)


def is_some(value: Any) -> bool:
    return isinstance(value, Some)


def is_nothing(value: Any) -> bool:
    return isinstance(value, NothingType)


class PredicateRegistry(Mapping[str, Guard]):
    """Immutable name -> guard mapping with attribute access.

    Examples:
        >>> p = PredicateRegistry({'is_even': lambda v: v % 2 == 0})
        >>> p.is_even(4)
        True
        >>> p['is_even'](3)
        False
    """

    __slots__ = ('_guards',)

    def __init__(self, guards: Mapping[str, Guard] | None = None) -> None:
        self._guards: dict[str, Guard] = dict(guards or {})

    def __getitem__(self, name: str) -> Guard:
        return self._guards[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._guards)

    def __len__(self) -> int:
        return len(self._guards)

    def __getattr__(self, name: str) -> Guard:
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self._guards[name]
        except KeyError:
            msg = f'No predicate registered under {name!r}'
            raise AttributeError(msg) from None

    def merge(self, overrides: Mapping[str, Guard] | None) -> PredicateRegistry:
        """Return a new registry with overrides layered on top.

        Entries in overrides replace entries of the same name.
        """
        if not overrides:
            return self
        return PredicateRegistry({**self._guards, **overrides})

    def __repr__(self) -> str:
        return f'PredicateRegistry({sorted(self._guards)!r})'


predicates = PredicateRegistry({
    'is_string': is_string,
    'is_number': is_number,
    'is_boolean': is_boolean,
    'is_nil': is_nil,
    'is_list': is_list,
    'is_function': is_function,
    'is_object': is_object,
    'is_awaitable': is_awaitable,
    'is_date': is_date,
    'is_regex': is_regex,
    'is_truthy': is_truthy,
    'is_falsy': is_falsy,
    'is_empty': is_empty,
    'is_ok': is_ok,
    'is_err': is_err,
    'is_some': is_some,
    'is_nothing': is_nothing,
})
"""Default registry passed to every match clause."""
