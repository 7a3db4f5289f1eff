"""Tests for the fixed-window rate limiter."""

import pytest

from cardquery.domain.shared.exceptions import ErrorCode, RateLimitExceededError
from cardquery.infrastructure.security import InMemoryRateLimitStore, RateLimiter


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def make_limiter(clock, **limits) -> RateLimiter:
    store = InMemoryRateLimitStore(sweep_interval=1000, clock=clock)
    return RateLimiter(store, window_seconds=60.0, **limits)


class TestRateLimiter:
    """Tests for the per-key, per-session and global windows."""

    @pytest.mark.asyncio
    async def test_key_limit(self, clock):
        limiter = make_limiter(clock, per_key=2)

        assert (await limiter.check("ip:1")).allowed
        assert (await limiter.check("ip:1")).allowed
        decision = await limiter.check("ip:1")

        assert not decision.allowed
        assert decision.scope == "key"
        assert decision.retry_after == 60

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, clock):
        limiter = make_limiter(clock, per_key=1)

        assert (await limiter.check("ip:1")).allowed
        assert (await limiter.check("ip:2")).allowed
        assert not (await limiter.check("ip:1")).allowed

    @pytest.mark.asyncio
    async def test_session_limit(self, clock):
        limiter = make_limiter(clock, per_key=10, per_session=1)

        assert (await limiter.check("ip:1", "s1")).allowed
        decision = await limiter.check("ip:2", "s1")
        assert not decision.allowed
        assert decision.scope == "session"

        assert (await limiter.check("ip:1", "s2")).allowed

    @pytest.mark.asyncio
    async def test_global_limit(self, clock):
        limiter = make_limiter(clock, per_key=10, global_limit=2)

        assert (await limiter.check("ip:1")).allowed
        assert (await limiter.check("ip:2")).allowed
        decision = await limiter.check("ip:3")

        assert not decision.allowed
        assert decision.scope == "global"

    @pytest.mark.asyncio
    async def test_rejected_request_is_not_counted(self, clock):
        """A request refused by one window does not consume the others."""
        limiter = make_limiter(clock, per_key=1, global_limit=3)

        assert (await limiter.check("a")).allowed
        assert not (await limiter.check("a")).allowed
        assert (await limiter.check("b")).allowed
        assert (await limiter.check("c")).allowed

        decision = await limiter.check("d")
        assert decision.scope == "global"

    @pytest.mark.asyncio
    async def test_retry_after_is_at_least_one_second(self, clock):
        limiter = make_limiter(clock, per_key=1)
        await limiter.check("ip:1")

        clock.advance(59.8)
        decision = await limiter.check("ip:1")

        assert not decision.allowed
        assert decision.retry_after == 1

    @pytest.mark.asyncio
    async def test_window_resets(self, clock):
        limiter = make_limiter(clock, per_key=1)
        await limiter.check("ip:1")
        assert not (await limiter.check("ip:1")).allowed

        clock.advance(60.1)

        assert (await limiter.check("ip:1")).allowed

    @pytest.mark.asyncio
    async def test_enforce_raises(self, clock):
        limiter = make_limiter(clock, per_key=1)
        await limiter.enforce("ip:1")

        with pytest.raises(RateLimitExceededError) as exc_info:
            await limiter.enforce("ip:1")

        assert exc_info.value.code == ErrorCode.RATE_LIMITED
        assert exc_info.value.scope == "key"
        assert exc_info.value.retry_after == 60


class TestInMemoryRateLimitStore:
    """Tests for window bookkeeping."""

    @pytest.mark.asyncio
    async def test_sweep_removes_expired_windows(self, clock):
        store = InMemoryRateLimitStore(sweep_interval=1000, clock=clock)
        limiter = RateLimiter(store, window_seconds=60.0)
        await limiter.check("ip:1")
        assert len(store) == 2

        clock.advance(61)

        assert await store.sweep() == 2
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_periodic_sweep(self, clock):
        store = InMemoryRateLimitStore(sweep_interval=2, clock=clock)
        limiter = RateLimiter(store, window_seconds=60.0)
        await limiter.check("ip:1")

        clock.advance(61)
        await limiter.check("ip:2")

        # Only the fresh global window and ip:2 remain.
        assert len(store) == 2

    @pytest.mark.asyncio
    async def test_reset(self, clock):
        store = InMemoryRateLimitStore(clock=clock)
        limiter = RateLimiter(store, per_key=1, window_seconds=60.0)
        await limiter.check("ip:1")

        await store.reset()

        assert (await limiter.check("ip:1")).allowed
