# tom/runtime/timeout.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Optional

from tom.core.errors import ExecutionError, TimeoutExpiredError

logger = logging.getLogger(__name__)


class TimeoutRace:
    """
    A deferred value that never resolves and fails with
    ``TimeoutExpiredError`` once the configured delay has elapsed.

    The timer is armed on ``start()`` and dropped by ``cancel()``, so a race
    that is won by the other competitor leaves nothing scheduled on the loop.
    """

    def __init__(self, timeout: float, message: Optional[str] = None) -> None:
        """
        :param timeout: Delay in milliseconds.
        :param message: Optional error message, defaults to ``Timeout expired [timeout]``.
        """
        self._timeout = timeout
        self._message = message
        self._future: Optional[asyncio.Future] = None
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def future(self) -> Optional[asyncio.Future]:
        """The future that fails on expiry, or None before ``start()``."""
        return self._future

    @property
    def expired(self) -> bool:
        return self._future is not None and self._future.done() and not self._future.cancelled()

    def start(self) -> asyncio.Future:
        """Arm the timer on the running loop and return the failing future."""
        if self._future is None:
            loop = asyncio.get_running_loop()
            self._future = loop.create_future()
            self._handle = loop.call_later(self._timeout / 1000, self._expire)
        return self._future

    def cancel(self) -> None:
        """Drop the timer; a future that has not yet failed is cancelled."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._future is None:
            return
        if not self._future.done():
            self._future.cancel()
        elif not self._future.cancelled():
            # Mark an expiry that lost a tie as retrieved.
            self._future.exception()

    def _expire(self) -> None:
        self._handle = None
        if not self._future.done():
            self._future.set_exception(TimeoutExpiredError(self._timeout, self._message))

    def __await__(self):
        return self.start().__await__()


def _discard_late_outcome(task: asyncio.Future) -> None:
    """Retrieve and drop the outcome of a competitor that lost the race."""
    if task.cancelled():
        return
    err = task.exception()
    if err is not None:
        logger.debug("Discarding late failure of timed-out body: %r", err)
    else:
        logger.debug("Discarding late result of timed-out body: %r", task.result())


async def race(awaitable: Awaitable[Any], timeout: float, message: Optional[str] = None) -> Any:
    """
    Await ``awaitable`` against a ``TimeoutRace`` of ``timeout`` milliseconds.

    The first competitor to settle decides the outcome. A body that loses is
    not cancelled; its eventual outcome is discarded.

    :param awaitable: The body's deferred outcome.
    :param timeout: Time limit in milliseconds.
    :param message: Optional timeout error message.
    :return: The awaitable's result if it settles first.
    :raises TimeoutExpiredError: If the timeout settles first.
    :raises ExecutionError: If the awaitable is cancelled before the timeout.
    """
    task = asyncio.ensure_future(awaitable)
    timer = TimeoutRace(timeout, message)
    expiry = timer.start()
    try:
        await asyncio.wait({task, expiry}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        timer.cancel()
        if not task.done():
            task.add_done_callback(_discard_late_outcome)

    if task.done():
        if task.cancelled():
            raise ExecutionError("Test body was cancelled")
        return task.result()
    # Retrieves and raises TimeoutExpiredError.
    return expiry.result()
