"""Integration test fixtures for database and HTTP client operations.

Runs against in-memory SQLite by default. Set TEST_DATABASE_URL to a
``postgresql+asyncpg://`` URL to run the same tests against PostgreSQL.
Uses polyfactory for type-safe test data generation.
"""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import SQLModel

import src.keylight.models  # noqa: F401 - registers every table on the metadata
from src.keylight.api.dependencies import get_executor
from src.keylight.core.config import get_settings
from src.keylight.core.db import QueryExecutor, create_engine_for_url
from src.keylight.core.shutdown import request_drain
from src.keylight.main import create_app
from src.keylight.repositories import ProjectRepository, SubmissionRepository, UserRepository


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create a test engine with a fresh schema for each test."""
    url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")
    test_engine = create_engine_for_url(url, get_settings())

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
def executor(engine: AsyncEngine) -> QueryExecutor:
    """Executor bound to the test engine."""
    return QueryExecutor(engine)


@pytest.fixture
def submission_repository(executor: QueryExecutor) -> SubmissionRepository:
    return SubmissionRepository(executor)


@pytest.fixture
def user_repository(executor: QueryExecutor) -> UserRepository:
    return UserRepository(executor)


@pytest.fixture
def project_repository(executor: QueryExecutor) -> ProjectRepository:
    return ProjectRepository(executor)


@pytest.fixture
async def client(executor: QueryExecutor) -> AsyncGenerator[AsyncClient]:
    """Create test client wired to the test store."""
    request_drain.reset()

    app = create_app()
    app.dependency_overrides[get_executor] = lambda: executor
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
    request_drain.reset()
