"""Tests for matcher configuration and initialization."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest
from klaw_match import Execution, MatchConfig, get_config, init, match
from klaw_match._config import EXECUTION_ENV_VAR, _detect_execution, resolve_execution
from klaw_match._logging import LOGGER_NAME


class TestExecutionEnum:
    """Tests for the Execution enum."""

    def test_values(self) -> None:
        assert Execution.PARALLEL.value == 'parallel'
        assert Execution.SEQUENTIAL.value == 'sequential'

    def test_parse_is_case_insensitive(self) -> None:
        assert Execution.parse('Sequential') is Execution.SEQUENTIAL
        assert Execution.parse(' PARALLEL ') is Execution.PARALLEL

    def test_parse_passes_members_through(self) -> None:
        assert Execution.parse(Execution.SEQUENTIAL) is Execution.SEQUENTIAL

    def test_parse_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            Execution.parse('random')


class TestMatchConfig:
    def test_default_values(self) -> None:
        config = MatchConfig()
        assert config.execution is Execution.PARALLEL
        assert config.log_level is None

    def test_config_is_frozen(self) -> None:
        config = MatchConfig()
        with pytest.raises(AttributeError):
            config.execution = Execution.SEQUENTIAL  # type: ignore[misc]


class TestDetectExecution:
    """Tests for _detect_execution()."""

    def test_no_env_defaults_to_parallel(self) -> None:
        assert _detect_execution() is Execution.PARALLEL

    def test_env_sequential(self) -> None:
        with patch.dict(os.environ, {EXECUTION_ENV_VAR: 'sequential'}):
            assert _detect_execution() is Execution.SEQUENTIAL

    def test_env_blank_defaults_to_parallel(self) -> None:
        with patch.dict(os.environ, {EXECUTION_ENV_VAR: '   '}):
            assert _detect_execution() is Execution.PARALLEL

    def test_env_invalid_warns_and_defaults(self, caplog: pytest.LogCaptureFixture) -> None:
        with patch.dict(os.environ, {EXECUTION_ENV_VAR: 'eventually'}), caplog.at_level(logging.WARNING):
            assert _detect_execution() is Execution.PARALLEL
        assert 'eventually' in caplog.text


class TestInit:
    """Tests for init() and get_config()."""

    def test_init_with_defaults(self) -> None:
        config = init()
        assert config == MatchConfig()
        assert get_config() is config

    def test_init_with_string(self) -> None:
        assert init(execution='sequential').execution is Execution.SEQUENTIAL

    def test_init_invalid_execution_raises(self) -> None:
        with pytest.raises(ValueError):
            init(execution='sometimes')

    def test_init_reads_env(self) -> None:
        with patch.dict(os.environ, {EXECUTION_ENV_VAR: 'SEQUENTIAL'}):
            assert init().execution is Execution.SEQUENTIAL

    def test_explicit_execution_overrides_env(self) -> None:
        with patch.dict(os.environ, {EXECUTION_ENV_VAR: 'sequential'}):
            assert init(execution=Execution.PARALLEL).execution is Execution.PARALLEL

    def test_init_with_log_level_configures_logging(self) -> None:
        config = init(log_level='DEBUG')
        assert config.log_level == 'DEBUG'
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG

    def test_get_config_before_init_raises(self) -> None:
        with pytest.raises(RuntimeError, match='not initialized'):
            get_config()


class TestResolveExecution:
    """Priority: argument, then init(), then environment, then parallel."""

    def test_argument_wins(self) -> None:
        init(execution='parallel')
        assert resolve_execution('sequential') is Execution.SEQUENTIAL

    def test_config_beats_env(self) -> None:
        init(execution='parallel')
        with patch.dict(os.environ, {EXECUTION_ENV_VAR: 'sequential'}):
            assert resolve_execution() is Execution.PARALLEL

    def test_env_used_without_init(self) -> None:
        with patch.dict(os.environ, {EXECUTION_ENV_VAR: 'sequential'}):
            assert resolve_execution() is Execution.SEQUENTIAL

    def test_fallback(self) -> None:
        assert resolve_execution() is Execution.PARALLEL

    def test_matcher_picks_up_configuration(self) -> None:
        init(execution='sequential')
        assert match(1).execution is Execution.SEQUENTIAL
        assert match(1, execution='parallel').execution is Execution.PARALLEL
