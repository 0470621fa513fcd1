"""Matcher configuration: Execution enum, MatchConfig, and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import StrEnum

from klaw_match._logging import configure_logging

__all__ = [
    'EXECUTION_ENV_VAR',
    'Execution',
    'MatchConfig',
    'get_config',
    'init',
    'resolve_execution',
]

EXECUTION_ENV_VAR = 'KLAW_MATCH_EXECUTION'


class Execution(StrEnum):
    """Scheduling model for clause predicates.

    PARALLEL starts every predicate as soon as its clause is registered.
    SEQUENTIAL lets each clause settle before the next predicate starts.
    """

    PARALLEL = 'parallel'
    SEQUENTIAL = 'sequential'

    @classmethod
    def parse(cls, value: Execution | str) -> Execution:
        """Accept an Execution or a case-insensitive name.

        Raises:
            ValueError: If value names no known model.
        """
        if isinstance(value, Execution):
            return value
        return cls(value.strip().lower())


@dataclass(frozen=True)
class MatchConfig:
    """Process-wide defaults for matchers.

    Attributes:
        execution: Model used when match() is not given one.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
    """

    execution: Execution = Execution.PARALLEL
    log_level: str | None = None


# Global configuration (set by init())
_config: MatchConfig | None = None


def _detect_execution() -> Execution:
    """Read the execution model from the environment.

    Unknown values are reported and ignored.
    """
    env_value = os.environ.get(EXECUTION_ENV_VAR, '').strip()
    if not env_value:
        return Execution.PARALLEL
    try:
        return Execution.parse(env_value)
    except ValueError:
        logging.warning("Unknown %s value '%s', defaulting to parallel", EXECUTION_ENV_VAR, env_value)
        return Execution.PARALLEL


def init(
    execution: Execution | str | None = None,
    log_level: str | None = None,
) -> MatchConfig:
    """Set the process-wide matcher defaults.

    Args:
        execution: Default execution model. Read from KLAW_MATCH_EXECUTION if None.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.

    Returns:
        The MatchConfig that was set.

    Example:
        ```python
        from klaw_match import init

        init(execution='sequential', log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    resolved = _detect_execution() if execution is None else Execution.parse(execution)
    _config = MatchConfig(execution=resolved, log_level=log_level)

    if log_level is not None:
        configure_logging(log_level)

    return _config


def get_config() -> MatchConfig:
    """Get the current configuration.

    Raises:
        RuntimeError: If init() has not been called.
    """
    if _config is None:
        msg = 'klaw_match not initialized. Call init() first.'
        raise RuntimeError(msg)
    return _config


def resolve_execution(execution: Execution | str | None = None) -> Execution:
    """Pick the execution model for a new matcher.

    Priority: the explicit argument, then init() configuration, then the
    KLAW_MATCH_EXECUTION environment variable, then PARALLEL.
    """
    if execution is not None:
        return Execution.parse(execution)
    if _config is not None:
        return _config.execution
    return _detect_execution()


def _reset() -> None:
    """Forget the configuration set by init(). Used by tests."""
    global _config  # noqa: PLW0603
    _config = None
