"""Tests for logging configuration, hooks and matcher events."""

from __future__ import annotations

import logging
from typing import Any

import pytest
from klaw_match import match
from klaw_match._logging import (
    LOGGER_NAME,
    add_log_hook,
    clear_log_hooks,
    configure_logging,
    get_logger,
    remove_log_hook,
)


@pytest.fixture
def events() -> list[dict[str, Any]]:
    """Collect every event dict emitted while DEBUG logging is on."""
    received: list[dict[str, Any]] = []
    configure_logging(level='DEBUG', json_output=True)
    add_log_hook(received.append)
    return received


class TestGetLogger:
    def test_names_are_namespaced(self) -> None:
        assert get_logger('test')._logger.name == f'{LOGGER_NAME}.test'
        assert get_logger()._logger.name == LOGGER_NAME
        assert get_logger('klaw_match.match')._logger.name == 'klaw_match.match'

    def test_configure_only_touches_library_logger(self) -> None:
        root_handlers = list(logging.getLogger().handlers)
        configure_logging(level='WARNING', json_output=False)

        library_logger = logging.getLogger(LOGGER_NAME)
        assert library_logger.level == logging.WARNING
        assert library_logger.propagate is False
        assert len(library_logger.handlers) == 1
        assert logging.getLogger().handlers == root_handlers

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging(level='DEBUG')
        configure_logging(level='INFO')
        assert len(logging.getLogger(LOGGER_NAME).handlers) == 1

    def test_level_filters_events(self) -> None:
        received: list[dict[str, Any]] = []
        configure_logging(level='WARNING')
        add_log_hook(received.append)

        get_logger('test').info('dropped')
        get_logger('test').warning('kept')

        assert [e['event'] for e in received] == ['kept']


class TestLogHooks:
    """Tests for logging hooks functionality."""

    def test_hook_receives_log_events(self, events: list[dict[str, Any]]) -> None:
        get_logger('test').info('Test message', extra_field='extra_value')

        entries = [e for e in events if e.get('event') == 'Test message']
        assert len(entries) == 1
        assert entries[0]['extra_field'] == 'extra_value'
        assert entries[0]['level'] == 'info'

    def test_remove_hook(self, events: list[dict[str, Any]]) -> None:
        logger = get_logger('test')
        logger.info('First')
        remove_log_hook(events.append)
        logger.info('Second')

        assert [e['event'] for e in events] == ['First']

    def test_remove_unknown_hook_is_noop(self) -> None:
        remove_log_hook(lambda _event: None)

    def test_clear_hooks(self) -> None:
        calls: list[str] = []
        configure_logging(level='DEBUG')
        add_log_hook(lambda _e: calls.append('a'))
        add_log_hook(lambda _e: calls.append('b'))

        logger = get_logger('test')
        logger.info('First')
        assert calls == ['a', 'b']

        clear_log_hooks()
        logger.info('Second')
        assert calls == ['a', 'b']

    def test_hook_exception_does_not_break_logging(self) -> None:
        """A failing hook neither raises nor starves later hooks."""
        calls: list[str] = []

        def bad_hook(event_dict: dict[str, Any]) -> None:
            raise RuntimeError('Hook failed')

        configure_logging(level='DEBUG')
        add_log_hook(bad_hook)
        add_log_hook(lambda _e: calls.append('good'))

        get_logger('test').info('Test')

        assert calls == ['good']

    def test_hook_receives_copy_of_event_dict(self) -> None:
        seen: list[dict[str, Any]] = []

        def mutating_hook(event_dict: dict[str, Any]) -> None:
            event_dict['mutated'] = True

        configure_logging(level='DEBUG')
        add_log_hook(mutating_hook)
        add_log_hook(seen.append)

        get_logger('test').info('Test')

        assert 'mutated' not in seen[0]


class TestMatcherEvents:
    """The matcher reports its commit decisions at DEBUG level."""

    def test_sync_commit_and_skip(self, events: list[dict[str, Any]]) -> None:
        (
            match(1)
            .when(lambda v, p: p.is_number(v), str)
            .when(lambda v, p: True, str)
            .default(lambda _: 'none')
        )

        names = [(e['event'], e.get('mode') or e.get('reason')) for e in events]
        assert names == [('clause committed', 'sync'), ('clause skipped', 'committed')]
        assert all(e['logger'] == 'klaw_match.match' for e in events)

    def test_fallback_event(self, events: list[dict[str, Any]]) -> None:
        match('x').when(lambda v, p: False, str).or_else('fallback')

        assert [e['event'] for e in events] == ['fallback committed']

    def test_silent_without_configuration(self) -> None:
        received: list[dict[str, Any]] = []
        logging.getLogger(LOGGER_NAME).setLevel(logging.WARNING)
        add_log_hook(received.append)

        match(1).when(lambda v, p: True, str).default(str)

        assert received == []
