"""Alembic migration runner shared by deployment scripts and tests."""

import asyncio

from alembic import command
from alembic.config import Config


def run_migrations_sync(revision: str = "head", config_path: str = "alembic.ini") -> None:
    """Upgrade the database to ``revision``."""
    command.upgrade(Config(config_path), revision)


async def run_migrations_async(revision: str = "head", config_path: str = "alembic.ini") -> None:
    """Run migrations from async code without blocking the event loop.

    Alembic's env runs its own event loop, so it gets a worker thread.
    """
    await asyncio.to_thread(run_migrations_sync, revision, config_path)
