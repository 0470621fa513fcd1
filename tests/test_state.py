"""Tests for MatchState, the commit cell behind Matcher."""

import asyncio

import pytest
from klaw_match import MatchState


class TestCommit:
    def test_starts_uncommitted(self):
        state = MatchState()
        assert not state.committed
        assert not state.has_outcome
        assert not state.is_async
        assert state.pending == 0
        assert state.error is None

    def test_first_commit_wins(self):
        state = MatchState()
        assert state.try_commit() is True
        assert state.try_commit() is False
        assert state.committed

    def test_outcome_requires_commit(self):
        state = MatchState()
        with pytest.raises(RuntimeError, match='before committing'):
            state.set_outcome(1)

    def test_outcome_is_write_once(self):
        state = MatchState()
        state.try_commit()
        state.set_outcome(None)
        assert state.has_outcome
        assert state.outcome is None
        with pytest.raises(RuntimeError, match='already set'):
            state.set_outcome(2)

    def test_reading_unset_outcome_raises(self):
        state = MatchState()
        state.try_commit()
        with pytest.raises(RuntimeError, match='not available yet'):
            _ = state.outcome

    def test_repr(self):
        state = MatchState()
        assert repr(state) == 'MatchState(uncommitted, outcome=<unset>, pending=0)'
        state.try_commit()
        state.set_outcome('x')
        assert repr(state) == "MatchState(committed, outcome='x', pending=0)"


class TestPending:
    def test_begin_and_finish_count(self):
        state = MatchState()
        state.begin()
        state.begin()
        assert state.pending == 2
        assert state.is_async
        state.finish()
        assert state.pending == 1

    def test_first_error_is_kept(self):
        state = MatchState()
        first = ValueError('first')
        state.fail(first)
        state.fail(KeyError('second'))
        assert state.error is first

    @pytest.mark.asyncio
    async def test_settled_returns_immediately_when_idle(self):
        await asyncio.wait_for(MatchState().settled(), timeout=1)

    @pytest.mark.asyncio
    async def test_settled_waits_for_all_work(self):
        state = MatchState()
        state.begin()
        state.begin()
        order = []

        async def work(delay: float, name: str) -> None:
            await asyncio.sleep(delay)
            order.append(name)
            state.finish()

        tasks = [asyncio.create_task(work(0.02, 'slow')), asyncio.create_task(work(0, 'fast'))]
        await asyncio.wait_for(state.settled(), timeout=1)
        order.append('settled')
        await asyncio.gather(*tasks)

        assert order == ['fast', 'slow', 'settled']
        assert state.pending == 0
