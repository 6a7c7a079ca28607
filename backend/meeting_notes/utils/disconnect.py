"""Cancel in-flight work when the HTTP client goes away."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Awaitable, TypeVar

from starlette.requests import Request

logger = logging.getLogger(__name__)

T = TypeVar("T")

POLL_INTERVAL_SECONDS = 0.5


class ClientDisconnected(Exception):
    """The caller hung up before the work finished."""


async def run_until_disconnected(
    request: Request,
    work: Awaitable[T],
    poll_interval: float = POLL_INTERVAL_SECONDS,
) -> T:
    """Await ``work`` while polling the connection.

    Raises:
        ClientDisconnected: The client disconnected; ``work`` was cancelled.
    """
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if task in done:
                return task.result()
            if await request.is_disconnected():
                logger.warning("Client disconnected from %s; cancelling work", request.url.path)
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
                raise ClientDisconnected(request.url.path)
    finally:
        if not task.done():
            task.cancel()
