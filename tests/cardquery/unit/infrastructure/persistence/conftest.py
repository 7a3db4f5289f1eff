"""
Pytest fixtures for infrastructure persistence tests.

Each test gets a fresh in-memory SQLite database. The engine uses a
StaticPool so every session sees the same connection (and therefore the
same database) for the duration of the test.
"""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cardquery.infrastructure.persistence.sqlalchemy.models import Base


@pytest_asyncio.fixture
async def async_engine():
    """Create an in-memory engine with all tables, dropped after the test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(async_engine):
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def async_session(session_maker):
    """
    Provide an isolated session for one test.

    Uncommitted changes are rolled back after the test.
    """
    async with session_maker() as session:
        yield session
        await session.rollback()
