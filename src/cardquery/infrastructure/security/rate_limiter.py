"""Fixed-window rate limiting: global ceiling, per key, per session."""

from __future__ import annotations

import asyncio
import logging
import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from cardquery.domain.shared.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

GLOBAL_SCOPE = "global"
KEY_SCOPE = "key"
SESSION_SCOPE = "session"


@dataclass
class RateLimitEntry:
    """Counter for one fixed window."""

    key: str
    count: int
    window_reset_time: float

    def is_expired(self, now: float) -> bool:
        return now > self.window_reset_time


@dataclass(frozen=True)
class WindowCheck:
    """One limit to enforce: a counter key, its scope label and ceiling."""

    scope: str
    key: str
    limit: int


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    retry_after: Optional[int] = None
    scope: Optional[str] = None


class RateLimitStore(ABC):
    """
    Counter storage behind the limiter.

    ``hit`` must check and increment every window as one atomic step: a
    request is counted in all windows or in none.
    """

    @abstractmethod
    async def hit(self, checks: list[WindowCheck], window_seconds: float) -> RateLimitDecision:
        """
        Admit or reject one request against several windows.

        Parameters
        ----------
        checks
            Windows to test, in order; the first exhausted one decides
        window_seconds
            Length of a fresh window

        Returns
        -------
        RateLimitDecision; on rejection, ``retry_after`` is whole seconds
        until the exhausted window resets (at least 1)
        """

    @abstractmethod
    async def sweep(self) -> int:
        """Remove expired windows. Returns the number removed."""

    @abstractmethod
    async def reset(self) -> None:
        """Forget every window."""


class InMemoryRateLimitStore(RateLimitStore):
    """
    Per-process window counters guarded by an ``asyncio.Lock``.

    Expired windows are swept every ``sweep_interval`` checks rather than
    on each access.
    """

    def __init__(
        self,
        sweep_interval: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._entries: dict[str, RateLimitEntry] = {}
        self._sweep_interval = max(1, sweep_interval)
        self._checks = 0
        self._clock = clock
        self._lock = asyncio.Lock()

    async def hit(self, checks: list[WindowCheck], window_seconds: float) -> RateLimitDecision:
        async with self._lock:
            now = self._clock()
            self._checks += 1
            if self._checks >= self._sweep_interval:
                self._checks = 0
                self._sweep(now)

            for check in checks:
                entry = self._entries.get(check.key)
                if entry is None or entry.is_expired(now):
                    continue
                if entry.count >= check.limit:
                    retry_after = max(1, math.ceil(entry.window_reset_time - now))
                    return RateLimitDecision(False, retry_after, check.scope)

            for check in checks:
                entry = self._entries.get(check.key)
                if entry is None or entry.is_expired(now):
                    self._entries[check.key] = RateLimitEntry(
                        key=check.key,
                        count=1,
                        window_reset_time=now + window_seconds,
                    )
                else:
                    entry.count += 1

            return RateLimitDecision(True)

    async def sweep(self) -> int:
        async with self._lock:
            return self._sweep(self._clock())

    async def reset(self) -> None:
        async with self._lock:
            self._entries.clear()
            self._checks = 0

    def __len__(self) -> int:
        return len(self._entries)

    def _sweep(self, now: float) -> int:
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)


class RateLimiter:
    """
    Enforces the global, per-key and per-session ceilings.

    The global window is checked first, then the caller's key, then the
    session (only when the request carries one).
    """

    def __init__(  # noqa: PLR0913
        self,
        store: RateLimitStore,
        per_key: int = 30,
        per_session: int = 20,
        global_limit: int = 1000,
        window_seconds: float = 60.0,
    ):
        self._store = store
        self._per_key = per_key
        self._per_session = per_session
        self._global_limit = global_limit
        self._window_seconds = window_seconds

    async def check(self, key: str, session_id: Optional[str] = None) -> RateLimitDecision:
        checks = [
            WindowCheck(GLOBAL_SCOPE, f"{GLOBAL_SCOPE}:*", self._global_limit),
            WindowCheck(KEY_SCOPE, f"{KEY_SCOPE}:{key}", self._per_key),
        ]
        if session_id:
            checks.append(
                WindowCheck(SESSION_SCOPE, f"{SESSION_SCOPE}:{session_id}", self._per_session),
            )
        return await self._store.hit(checks, self._window_seconds)

    async def enforce(self, key: str, session_id: Optional[str] = None) -> None:
        """
        Admit the request or raise.

        Raises
        ------
        RateLimitExceededError
            With the retry-after of the exhausted window
        """
        decision = await self.check(key, session_id)
        if not decision.allowed:
            logger.info(
                "Rate limit (%s) exceeded for %s; retry after %ss",
                decision.scope,
                key,
                decision.retry_after,
            )
            raise RateLimitExceededError(
                retry_after=decision.retry_after or 1,
                scope=decision.scope or KEY_SCOPE,
            )
