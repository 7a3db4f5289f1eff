"""Collapse concurrent identical computations into one."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SingleFlight(Generic[T]):
    """
    Per-key in-flight deduplication.

    The first caller for a key starts the computation as its own task and
    stores it under the key; every caller, the first included, awaits that
    task through ``asyncio.shield``. Cancelling a caller therefore only
    abandons that caller's wait: the computation keeps running for the
    others. The key is removed when the task settles, so a later call
    recomputes (the result cache is what serves repeats). An exception is
    delivered to every waiter.
    """

    def __init__(self):
        self._in_flight: dict[str, asyncio.Task[T]] = {}
        self._collapsed = 0

    @property
    def collapsed(self) -> int:
        """Number of calls that joined an in-flight computation."""
        return self._collapsed

    def in_flight(self, key: str) -> bool:
        return key in self._in_flight

    async def do(self, key: str, fn: Callable[[], Awaitable[T]]) -> T:
        """
        Run ``fn`` once per key at a time and share its result.

        Parameters
        ----------
        key
            Deduplication key (the query hash)
        fn
            Zero-argument coroutine factory performing the computation

        Returns
        -------
        The computation's result

        Raises
        ------
        Exception
            Whatever ``fn`` raised, re-raised in every waiter
        """
        task = self._in_flight.get(key)
        if task is not None:
            self._collapsed += 1
            logger.debug("Joining in-flight computation for %s", key)
            return await asyncio.shield(task)

        task = asyncio.ensure_future(fn())
        self._in_flight[key] = task
        task.add_done_callback(lambda done: self._settle(key, done))
        return await asyncio.shield(task)

    def _settle(self, key: str, task: asyncio.Task[T]) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        if not task.cancelled() and task.exception() is not None:
            # Every caller may have gone; retrieve so asyncio does not warn
            logger.debug("In-flight computation for %s failed: %r", key, task.exception())
