"""Core types: Result, Ok, Err, Option, Some, Nothing."""

from klaw_match.types.option import Nothing, NothingType, Option, Some, nothing, some
from klaw_match.types.result import Err, Ok, Result, err, ok

__all__ = [
    'Err',
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'Result',
    'Some',
    'err',
    'nothing',
    'ok',
    'some',
]
