"""Pytest fixtures for API integration tests.

Each test gets a fresh file-backed SQLite database and its own copies of
the process-wide singletons (result cache, in-flight guard, rate
limiter), so no state leaks between tests. The generative backend and
the live validator are replaced by in-process fakes.
"""

import asyncio
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from cardquery.domain.feedback import (
    FeedbackItem,
    LiveValidator,
    RuleCandidate,
    RuleGenerator,
)
from cardquery.domain.mining import TranslationLogEntry, TranslationSource
from cardquery.infrastructure.cache import (
    InMemoryResultCache,
    SingleFlight,
    TieredResultCache,
)
from cardquery.infrastructure.persistence.sqlalchemy.models import Base
from cardquery.infrastructure.persistence.sqlalchemy.repositories import (
    TranslationLogRepositorySQLAlchemy,
)
from cardquery.infrastructure.security import InMemoryRateLimitStore, RateLimiter
from cardquery.presentation.api.app import API_V1_PREFIX, create_app
from cardquery.presentation.api.config import get_api_settings
from cardquery.presentation.api.dependencies import (
    get_db_session,
    get_live_validator,
    get_rate_limiter,
    get_result_cache,
    get_rule_generator,
    get_single_flight,
)
from cardquery_auth import JWTService
from cardquery_config.settings import Settings

TEST_JWT_SECRET = "test-jwt-secret-for-api-tests-0123456789abcdef"
TEST_API_SECRET = "test-api-secret-for-api-tests-0123456789"
TEST_SERVICE_SECRET = "test-service-secret-for-api-tests-0123"
TEST_ORIGIN = "http://localhost:3000"


class FakeRuleGenerator(RuleGenerator):
    """Generator answering every correction with the same candidate."""

    def __init__(self, candidate: Optional[RuleCandidate]):
        self.candidate = candidate

    async def generate(
        self,
        feedback: FeedbackItem,
        attempt_number: int = 1,
    ) -> Optional[RuleCandidate]:
        return self.candidate

    @property
    def model_name(self) -> str:
        return "fake-model"


class FakeLiveValidator(LiveValidator):
    """Validator reporting the same result count for every query."""

    def __init__(self, count: int = 25):
        self.count = count

    async def count_results(self, compiled_query: str) -> int:
        return self.count


def run_sync(coro):
    """Run a coroutine in a fresh event loop, outside the TestClient's loop."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test API settings with known secrets and a throwaway database."""
    return Settings(
        jwt_secret_key=SecretStr(TEST_JWT_SECRET),
        jwt_issuer="cardquery",
        api_secret=SecretStr(TEST_API_SECRET),
        service_role_key=SecretStr(TEST_SERVICE_SECRET),
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        api_debug=True,
        api_cors_origins=TEST_ORIGIN,
        rate_limit_per_key=100,
        rate_limit_per_session=100,
        rate_limit_global=1000,
        miner_min_occurrences=3,
        miner_live_validation=True,
        validation_fail_open=True,
    )


@pytest.fixture
def async_engine(api_settings):
    """File-backed SQLite engine; NullPool keeps connections off the test loop."""
    engine = create_async_engine(api_settings.database_url, poolclass=NullPool)

    async def _setup():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    run_sync(_setup())
    yield engine
    run_sync(engine.dispose())


@pytest.fixture
def session_maker(async_engine):
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def rule_generator() -> FakeRuleGenerator:
    return FakeRuleGenerator(
        RuleCandidate(
            pattern="mana rocks",
            compiled_query="otag:mana-rock",
            confidence=0.9,
            description="artifact mana sources",
        ),
    )


@pytest.fixture
def live_validator() -> FakeLiveValidator:
    return FakeLiveValidator()


@pytest.fixture
def test_client(api_settings, session_maker, rule_generator, live_validator):
    """Create a test client with every external collaborator replaced."""
    app = create_app(settings=api_settings)

    async def override_get_db_session():
        async with session_maker() as session:
            yield session

    cache = TieredResultCache(InMemoryResultCache())
    single_flight = SingleFlight()
    limiter = RateLimiter(
        InMemoryRateLimitStore(),
        per_key=api_settings.rate_limit_per_key,
        per_session=api_settings.rate_limit_per_session,
        global_limit=api_settings.rate_limit_global,
        window_seconds=api_settings.rate_limit_window_seconds,
    )

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings
    app.dependency_overrides[get_result_cache] = lambda: cache
    app.dependency_overrides[get_single_flight] = lambda: single_flight
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    app.dependency_overrides[get_rule_generator] = lambda: rule_generator
    app.dependency_overrides[get_live_validator] = lambda: live_validator

    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict:
    """Bearer header carrying the API secret."""
    return {"Authorization": f"Bearer {TEST_API_SECRET}"}


@pytest.fixture
def jwt_service() -> JWTService:
    """Token issuer sharing the test secret."""
    return JWTService(TEST_JWT_SECRET, issuer="cardquery")


@pytest.fixture
def service_headers() -> dict:
    """Bearer header carrying the service secret."""
    return {"Authorization": f"Bearer {TEST_SERVICE_SECRET}"}


@pytest.fixture
def cors_origin() -> str:
    return TEST_ORIGIN


@pytest.fixture
def seed_translation_logs(session_maker):
    """Write identical translation log entries straight to the database."""

    def _seed(query: str, compiled: str, times: int) -> None:
        async def _write():
            async with session_maker() as session:
                repo = TranslationLogRepositorySQLAlchemy(session)
                for _ in range(times):
                    await repo.record(
                        TranslationLogEntry(
                            natural_query=query,
                            compiled_query=compiled,
                            confidence=0.9,
                            source=TranslationSource.PIPELINE,
                        ),
                    )
                await session.commit()

        run_sync(_write())

    return _seed
