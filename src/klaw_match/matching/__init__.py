"""Pattern matching: Matcher, MatchState and the match() entry point."""

from klaw_match._config import Execution
from klaw_match.matching.matcher import Handler, Matcher, Predicate, create_matcher, match
from klaw_match.matching.state import MatchState

__all__ = [
    'Execution',
    'Handler',
    'MatchState',
    'Matcher',
    'Predicate',
    'create_matcher',
    'match',
]
