"""Pytest configuration and shared fixtures for klaw_match tests."""

import logging

import pytest
from klaw_match import _config
from klaw_match._config import EXECUTION_ENV_VAR
from klaw_match._logging import LOGGER_NAME, clear_log_hooks


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Every test starts uninitialized, without hooks or env overrides."""
    monkeypatch.delenv(EXECUTION_ENV_VAR, raising=False)
    _config._reset()
    clear_log_hooks()
    yield
    _config._reset()
    clear_log_hooks()
    library_logger = logging.getLogger(LOGGER_NAME)
    library_logger.handlers.clear()
    library_logger.setLevel(logging.NOTSET)
    library_logger.propagate = True
