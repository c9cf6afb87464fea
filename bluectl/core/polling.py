"""Timeout-bounded polling used to wait for bus objects to appear."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from bluectl.core.errors import OperationTimeoutError

T = TypeVar("T")
LOGGER = logging.getLogger(__name__)


async def poll_until_found(
    attempt: Callable[[], Awaitable[T]],
    *,
    timeout_s: float,
    interval_s: float,
    miss: type[BaseException] | tuple[type[BaseException], ...],
) -> T:
    """Run ``attempt`` now and then every ``interval_s`` until it returns.

    Exceptions matching ``miss`` mean "not there yet" and keep the poll going.
    Anything else ends the poll and propagates. When ``timeout_s`` elapses
    first, :class:`OperationTimeoutError` is raised.

    The ticker runs inside the deadline scope, so leaving the scope on any path
    releases both and no attempt can start afterwards.
    """
    if timeout_s < 0 or interval_s <= 0:
        raise ValueError("timeout_s must be >= 0 and interval_s must be > 0")

    loop = asyncio.get_running_loop()
    deadline = asyncio.timeout(timeout_s)
    attempts = 0
    try:
        async with deadline:
            next_tick = loop.time()
            while True:
                attempts += 1
                try:
                    return await attempt()
                except miss as exc:
                    LOGGER.debug("Poll attempt %d missed: %s", attempts, exc)
                # Fixed cadence; after a slow attempt retry at once instead of bursting.
                next_tick = max(next_tick + interval_s, loop.time())
                await asyncio.sleep(max(0.0, next_tick - loop.time()))
    except TimeoutError:
        if not deadline.expired():
            raise
        raise OperationTimeoutError("operation timed out") from None
