# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest fixtures for event store integration tests.

Provides database sessions and engines for testing. Defaults to an
in-memory SQLite database; set TEST_DATABASE_URL to run against
PostgreSQL.
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from caliper_store.infrastructure.database.models import Base


@pytest.fixture(scope="session")
def event_db_url() -> str:
    """Get event store database URL for tests."""
    return os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest_asyncio.fixture(scope="function")
async def event_db_engine(event_db_url: str):
    """Create async engine for event store tests."""
    if event_db_url.startswith("sqlite"):
        engine = create_async_engine(event_db_url, echo=False, poolclass=StaticPool)
    else:
        engine = create_async_engine(event_db_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def event_db_session(event_db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session for event store tests."""
    async_session = async_sessionmaker(
        event_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()
