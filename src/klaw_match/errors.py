"""Unwrap error types raised by the fail-loud container accessors."""

from __future__ import annotations

from typing import Any

__all__ = [
    'UnwrapError',
    'UnwrappedAbsent',
    'UnwrappedFailure',
]


class UnwrapError(RuntimeError):
    """Base class for errors raised by unwrap() and expect()."""


class UnwrappedFailure(UnwrapError):
    """unwrap() or expect() was called on an Err.

    Carries the original error value so callers that catch it can still
    inspect what went wrong.
    """

    def __init__(self, error: Any, message: str | None = None) -> None:
        self.error = error
        self.message = message
        if message is None:
            super().__init__(f'Called unwrap on Err: {error!r}')
        else:
            super().__init__(f'{message}: {error!r}')


class UnwrappedAbsent(UnwrapError):
    """unwrap() or expect() was called on Nothing."""

    def __init__(self, message: str | None = None) -> None:
        self.message = message
        super().__init__(message or 'Called unwrap on Nothing')
