"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports so errors render without internals
os.environ.setdefault("APP_ENV", "testing")
# In-memory SQLite unless a PostgreSQL URL is provided
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DATABASE_SSL_MODE", "disable")

# ruff: noqa: E402 - Imports must be after env var setup
from unittest.mock import AsyncMock

import pytest

from src.keylight.core.config import get_settings
from src.keylight.repositories import SubmissionRepository, UserRepository

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def submission_repo() -> AsyncMock:
    """Mocked submission repository for service tests.

    ``table`` is the real table so column filtering behaves as in production.
    """
    repo = AsyncMock(spec=SubmissionRepository)
    repo.table = SubmissionRepository.model.__table__  # type: ignore[attr-defined]
    return repo


@pytest.fixture
def user_repo() -> AsyncMock:
    """Mocked user repository for service tests."""
    return AsyncMock(spec=UserRepository)
