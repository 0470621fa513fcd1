"""klaw-match: Result and Option containers with async-aware pattern matching.

Flat imports (preferred):
    from klaw_match import Ok, Err, Some, Nothing, match

Submodule imports (for organization):
    from klaw_match.types import Result, Option
    from klaw_match.matching import Matcher, MatchState
    from klaw_match.async_ import AsyncResult
"""

# Types
from klaw_match.types import (
    Err,
    Nothing,
    NothingType,
    Ok,
    Option,
    Result,
    Some,
    err,
    nothing,
    ok,
    some,
)

# Errors
from klaw_match.errors import UnwrapError, UnwrappedAbsent, UnwrappedFailure

# Matching
from klaw_match.matching import Execution, Matcher, MatchState, create_matcher, match
from klaw_match.predicates import PredicateRegistry, predicates

# Helpers
from klaw_match.utils import (
    all_ok,
    any_ok,
    from_nullable,
    from_sequence,
    safe,
    to_list,
    to_nullable,
    try_catch,
)

# Async
from klaw_match.async_ import (
    AsyncResult,
    async_all_ok,
    from_awaitable,
    unwrap_awaitable,
    unwrap_awaitable_or,
)

# Configuration and logging
from klaw_match._config import MatchConfig, get_config, init
from klaw_match._logging import configure_logging, get_logger

__all__ = [
    'AsyncResult',
    'Err',
    'Execution',
    'MatchConfig',
    'MatchState',
    'Matcher',
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'PredicateRegistry',
    'Result',
    'Some',
    'UnwrapError',
    'UnwrappedAbsent',
    'UnwrappedFailure',
    'all_ok',
    'any_ok',
    'async_all_ok',
    'configure_logging',
    'create_matcher',
    'err',
    'from_awaitable',
    'from_nullable',
    'from_sequence',
    'get_config',
    'get_logger',
    'init',
    'match',
    'nothing',
    'ok',
    'predicates',
    'safe',
    'some',
    'to_list',
    'to_nullable',
    'try_catch',
    'unwrap_awaitable',
    'unwrap_awaitable_or',
]
