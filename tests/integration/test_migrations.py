"""Tests for the Alembic migration chain."""

from collections.abc import Generator
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from src.keylight.core.config import get_settings
from src.keylight.core.migrations import run_migrations_async, run_migrations_sync

pytestmark = pytest.mark.integration


@pytest.fixture
def sqlite_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path]:
    """Point the settings at a throwaway SQLite file."""
    path = tmp_path / "migrations.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{path}")
    monkeypatch.delenv("DATABASE_MIGRATIONS_URL", raising=False)
    get_settings.cache_clear()
    yield path
    monkeypatch.undo()
    get_settings.cache_clear()


def table_names(path: Path) -> set[str]:
    engine = create_engine(f"sqlite:///{path}")
    try:
        return set(inspect(engine).get_table_names())
    finally:
        engine.dispose()


def test_initial_schema_creates_tables(sqlite_file: Path):
    run_migrations_sync("001")

    assert {"users", "projects", "intake_submissions"} <= table_names(sqlite_file)


def test_initial_schema_downgrades(sqlite_file: Path):
    run_migrations_sync("001")

    command.downgrade(Config("alembic.ini"), "base")

    assert "intake_submissions" not in table_names(sqlite_file)


async def test_async_runner(sqlite_file: Path):
    await run_migrations_async("001")

    assert "users" in table_names(sqlite_file)
