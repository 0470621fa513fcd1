"""Commit bookkeeping for a single Matcher.

MatchState holds the explicit state machine behind Matcher:

    UNCOMMITTED --try_commit()--> COMMITTED (terminal)

The first caller of try_commit() wins; every later caller gets False. The
outcome is written once, after the commit, and may lag behind it when the
winning handler is asynchronous. Outstanding asynchronous evaluations are
counted with an aiologic.CountdownEvent so a terminal operation can wait for
all of them to settle before deciding that nothing matched.
"""

from __future__ import annotations

import aiologic

__all__ = ['MatchState']

_UNSET: object = object()


class MatchState[R]:
    """First-writer-wins commit cell plus a pending-work counter.

    There is no lock: matchers run on a single event loop, and no method
    awaits between reading and writing the commit flag.

    Examples:
        >>> state: MatchState[int] = MatchState()
        >>> state.try_commit()
        True
        >>> state.try_commit()
        False
        >>> state.set_outcome(84)
        >>> state.outcome
        84
    """

    __slots__ = ('_committed', '_error', '_is_async', '_outcome', '_pending')

    def __init__(self) -> None:
        self._committed = False
        self._outcome: R | object = _UNSET
        self._error: BaseException | None = None
        self._is_async = False
        # Starts in the "set" state: nothing pending
        self._pending: aiologic.CountdownEvent = aiologic.CountdownEvent()

    @property
    def committed(self) -> bool:
        """True once some clause (or the fallback) has won."""
        return self._committed

    @property
    def has_outcome(self) -> bool:
        """True once the winner's result is available."""
        return self._outcome is not _UNSET

    @property
    def outcome(self) -> R:
        """The committed result.

        Raises:
            RuntimeError: If no outcome has been recorded yet.
        """
        if self._outcome is _UNSET:
            msg = 'Match outcome is not available yet'
            raise RuntimeError(msg)
        return self._outcome  # type: ignore[return-value]

    @property
    def pending(self) -> int:
        """Number of asynchronous evaluations still in flight."""
        return self._pending.value

    @property
    def is_async(self) -> bool:
        """True once any predicate or handler has returned an awaitable."""
        return self._is_async

    @property
    def error(self) -> BaseException | None:
        """First exception raised by an asynchronous evaluation, if any."""
        return self._error

    def try_commit(self) -> bool:
        """Move to COMMITTED if still UNCOMMITTED.

        Returns:
            True if this call performed the transition, False if another
            writer got there first.
        """
        if self._committed:
            return False
        self._committed = True
        return True

    def set_outcome(self, value: R) -> None:
        """Record the committed result.

        Raises:
            RuntimeError: If not committed yet, or if an outcome already exists.
        """
        if not self._committed:
            msg = 'Cannot set an outcome before committing'
            raise RuntimeError(msg)
        if self._outcome is not _UNSET:
            msg = 'Match outcome already set'
            raise RuntimeError(msg)
        self._outcome = value

    def begin(self) -> None:
        """Count one more asynchronous evaluation as in flight."""
        self._is_async = True
        self._pending.up()

    def finish(self) -> None:
        """Count one asynchronous evaluation as settled."""
        self._pending.down()

    def fail(self, exc: BaseException) -> None:
        """Remember an evaluation error; only the first one is kept."""
        if self._error is None:
            self._error = exc

    async def settled(self) -> None:
        """Wait until no asynchronous evaluation is in flight."""
        if self._pending.value == 0:
            return
        await self._pending

    def __repr__(self) -> str:
        status = 'committed' if self._committed else 'uncommitted'
        outcome = repr(self._outcome) if self._outcome is not _UNSET else '<unset>'
        return f'MatchState({status}, outcome={outcome}, pending={self.pending})'
