"""Runtime pattern matching over arbitrary predicates.

A Matcher takes one subject and an ordered list of (predicate, handler)
clauses and resolves to the handler result of the first clause whose
predicate holds, or to a fallback:

    label = (
        match(42)
        .when(lambda v, p: p.is_string(v), len)
        .when(lambda v, p: p.is_number(v), lambda n: n * 2)
        .default(lambda _: 0)
    )
    # 84

Predicates and handlers may be async. As soon as anything returns an
awaitable, default() and or_else() return a coroutine instead of a value.

Concurrency contract:

- Synchronous predicates are decided inline during when(), so among them
  the first registered wins.
- In PARALLEL mode every awaitable predicate runs as its own task from the
  moment its clause is registered; the first one to settle truthy wins
  (settlement order, not registration order). Make such predicates mutually
  exclusive when the winner matters.
- In SEQUENTIAL mode, once a clause is pending, later clauses wait their
  turn and are evaluated in registration order, each after the previous
  clause (predicate and matched handler) has fully settled.
- The awaited default()/or_else() waits for every tracked evaluation to
  settle before concluding that nothing matched. Evaluations are never
  cancelled; verdicts that arrive after the commit are discarded.
- An exception from a synchronous predicate or handler propagates out of the
  call that ran it. An exception from an asynchronous one is re-raised by
  the awaited default()/or_else().
"""

from __future__ import annotations

import asyncio
import inspect
from collections import deque
from collections.abc import Awaitable, Callable, Coroutine, Mapping
from typing import Any

from klaw_match._config import Execution, resolve_execution
from klaw_match._logging import get_logger
from klaw_match.matching.state import MatchState
from klaw_match.predicates import PredicateRegistry
from klaw_match.predicates import predicates as default_predicates

__all__ = [
    'Handler',
    'Matcher',
    'Predicate',
    'create_matcher',
    'match',
]

type Predicate[T] = Callable[[T, PredicateRegistry], bool | Awaitable[bool]]
type Handler[T, R] = Callable[[T], R | Awaitable[R]]

logger = get_logger('match')


class Matcher[T, R]:
    """Single-use dispatcher over one subject.

    Build with match(); register clauses with when(); finish with default()
    or or_else(). Every registration method returns the Matcher itself.

    Attributes:
        subject: The value under test.
        execution: The scheduling model in use.
        predicates: The registry handed to every predicate.
        state: Commit bookkeeping (see MatchState).
    """

    __slots__ = (
        '_deferred',
        '_draining',
        '_queue',
        '_tasks',
        'execution',
        'predicates',
        'state',
        'subject',
    )

    def __init__(
        self,
        subject: T,
        *,
        execution: Execution | str | None = None,
        predicates: Mapping[str, Callable[[Any], bool]] | None = None,
    ) -> None:
        self.subject = subject
        self.execution = resolve_execution(execution)
        self.predicates = default_predicates.merge(predicates)
        self.state: MatchState[R] = MatchState()
        self._tasks: set[asyncio.Task[None]] = set()
        self._deferred: list[Coroutine[Any, Any, None]] = []
        self._queue: deque[tuple[Predicate[T], Handler[T, R]]] = deque()
        self._draining = False

    # --- registration ---

    def when[U](self, predicate: Predicate[T], handler: Handler[U, R]) -> Matcher[T, R]:
        """Register a clause.

        Args:
            predicate: Called as predicate(subject, registry); returns a bool
                or an awaitable of one.
            handler: Called as handler(subject) only if this clause commits;
                returns the outcome or an awaitable of it.

        Returns:
            This Matcher, for chaining.
        """
        if self.state.committed:
            logger.debug('clause skipped', reason='committed')
            return self

        if self.execution is Execution.SEQUENTIAL and self._draining:
            self._queue.append((predicate, handler))
            return self

        verdict = predicate(self.subject, self.predicates)
        if inspect.isawaitable(verdict):
            if self.execution is Execution.SEQUENTIAL:
                self._draining = True
                self._track(self._drain(verdict, handler))
            else:
                self._track(self._settle_clause(verdict, handler))
        elif verdict:
            self._commit(handler)
        return self

    # --- terminal operations ---

    def default(self, handler: Handler[T, R]) -> R | Coroutine[Any, Any, R]:
        """Finish the match, calling handler(subject) if nothing matched.

        Returns:
            The outcome directly when everything ran synchronously, otherwise
            a coroutine that resolves to it once every evaluation has settled.
        """
        return self._finish(handler, literal=False)

    def or_else(self, value: R) -> R | Coroutine[Any, Any, R]:
        """Finish the match, using value if nothing matched.

        Same timing as default(); value is stored as-is, never called or
        awaited.
        """
        return self._finish(value, literal=True)

    # --- internals ---

    def _finish(self, fallback: Any, *, literal: bool) -> R | Coroutine[Any, Any, R]:
        if not self.state.is_async:
            self._commit_fallback(fallback, literal=literal)
            if not self.state.is_async:
                return self.state.outcome
        return self._resolve(fallback, literal=literal)

    def _commit_fallback(self, fallback: Any, *, literal: bool) -> None:
        """Commit the fallback unless a clause already won."""
        if not self.state.try_commit():
            return
        logger.debug('fallback committed', literal=literal)
        if literal:
            self.state.set_outcome(fallback)
            return
        outcome = fallback(self.subject)
        if inspect.isawaitable(outcome):
            self._track(self._settle_outcome(outcome))
        else:
            self.state.set_outcome(outcome)

    def _commit(self, handler: Handler[Any, R]) -> None:
        """Commit a clause whose predicate held synchronously."""
        if not self.state.try_commit():
            return
        logger.debug('clause committed', mode='sync')
        outcome = handler(self.subject)
        if inspect.isawaitable(outcome):
            self._track(self._settle_outcome(outcome))
        else:
            self.state.set_outcome(outcome)

    async def _evaluate(self, verdict: bool | Awaitable[bool], handler: Handler[Any, R]) -> None:
        """Settle a predicate verdict and, if it wins, the handler."""
        if inspect.isawaitable(verdict):
            verdict = await verdict
        if not verdict:
            return
        if not self.state.try_commit():
            logger.debug('clause skipped', reason='settled after commit')
            return
        logger.debug('clause committed', mode='async')
        outcome = handler(self.subject)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        self.state.set_outcome(outcome)

    async def _settle_clause(self, verdict: Awaitable[bool], handler: Handler[Any, R]) -> None:
        try:
            await self._evaluate(verdict, handler)
        except Exception as exc:
            logger.debug('async evaluation failed', error=repr(exc))
            self.state.fail(exc)
        finally:
            self.state.finish()

    async def _settle_outcome(self, outcome: Awaitable[R]) -> None:
        try:
            self.state.set_outcome(await outcome)
        except Exception as exc:
            logger.debug('async evaluation failed', error=repr(exc))
            self.state.fail(exc)
        finally:
            self.state.finish()

    async def _drain(self, verdict: Awaitable[bool], handler: Handler[Any, R]) -> None:
        """Evaluate queued clauses one at a time (SEQUENTIAL mode)."""
        try:
            await self._evaluate(verdict, handler)
            while self._queue and not self.state.committed:
                predicate, next_handler = self._queue.popleft()
                await self._evaluate(predicate(self.subject, self.predicates), next_handler)
        except Exception as exc:
            logger.debug('async evaluation failed', error=repr(exc))
            self.state.fail(exc)
        finally:
            self._queue.clear()
            self._draining = False
            self.state.finish()

    def _track(self, coro: Coroutine[Any, Any, None]) -> None:
        """Start coro as a tracked task, or hold it until a loop is running."""
        self.state.begin()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._deferred.append(coro)
            return
        self._spawn(loop, coro)

    def _spawn(self, loop: asyncio.AbstractEventLoop, coro: Coroutine[Any, Any, None]) -> None:
        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _resolve(self, fallback: Any, *, literal: bool) -> R:
        loop = asyncio.get_running_loop()
        while self._deferred:
            self._spawn(loop, self._deferred.pop(0))
        await self.state.settled()
        if self.state.error is None:
            # No-op when committed; an async fallback handler becomes pending
            self._commit_fallback(fallback, literal=literal)
            await self.state.settled()
        if self.state.error is not None:
            raise self.state.error
        return self.state.outcome

    def __repr__(self) -> str:
        return f'Matcher({self.subject!r}, execution={self.execution.value!r}, state={self.state!r})'


def match[T](
    subject: T,
    *,
    execution: Execution | str | None = None,
    predicates: Mapping[str, Callable[[Any], bool]] | None = None,
) -> Matcher[T, Any]:
    """Start matching on subject.

    Args:
        subject: The value to dispatch on.
        execution: "parallel" or "sequential". Defaults to the configured
            model (see init()), else the KLAW_MATCH_EXECUTION environment
            variable, else "parallel".
        predicates: Extra or replacement guards, merged over the defaults.

    Returns:
        A fresh Matcher.

    Example:
        ```python
        async def is_admin(user, _p) -> bool:
            return await directory.has_role(user, 'admin')

        greeting = await (
            match(user)
            .when(is_admin, lambda u: f'Welcome back, {u.name}')
            .when(lambda u, p: p.is_nil(u), lambda _: 'Please sign in')
            .or_else('Hello')
        )
        ```
    """
    return Matcher(subject, execution=execution, predicates=predicates)


create_matcher = match
