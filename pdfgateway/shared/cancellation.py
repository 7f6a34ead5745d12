"""
Tie long-running work to the lifetime of the HTTP client.
"""

import asyncio
import contextlib
from collections.abc import Awaitable
from typing import Protocol, TypeVar

from .errors import ClientDisconnectedError
from .logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class DisconnectAware(Protocol):
    async def is_disconnected(self) -> bool: ...


async def cancel_on_disconnect(
    request: DisconnectAware,
    work: Awaitable[T],
    poll_interval: float = 0.5,
) -> T:
    """
    Await `work`, cancelling it if the client disconnects first.

    Raises:
        ClientDisconnectedError: the client went away and the work was cancelled
    """
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()

            if await request.is_disconnected():
                logger.warning("Client disconnected, cancelling render")
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
                raise ClientDisconnectedError("Client disconnected before the PDF was ready")
    finally:
        if not task.done():
            task.cancel()
