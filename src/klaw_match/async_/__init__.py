"""Async utilities: AsyncResult and awaitable/Result bridges.

Examples:
    >>> from klaw_match.async_ import AsyncResult, from_awaitable
    >>>
    >>> async def main():
    ...     user = await from_awaitable(fetch_user(1), str)
    ...     name = await AsyncResult.from_result(user).amap(lambda u: u.name)
"""

from klaw_match.async_.helpers import async_all_ok, from_awaitable, unwrap_awaitable, unwrap_awaitable_or
from klaw_match.async_.result import AsyncResult

__all__ = [
    'AsyncResult',
    'async_all_ok',
    'from_awaitable',
    'unwrap_awaitable',
    'unwrap_awaitable_or',
]
