import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from shared.exceptions import RemoteTimeoutError

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], seconds: float, operation: str = "remote call") -> T:
    """Race a remote call against a timer.

    On expiry the pending call is cancelled, so a late result is never applied.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except TimeoutError:
        raise RemoteTimeoutError(operation, seconds) from None
