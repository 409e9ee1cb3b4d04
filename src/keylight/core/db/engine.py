"""Database engine management.

One process-wide pooled engine, created lazily on first use and drained on
shutdown. ``sqlite+aiosqlite`` URLs build the in-process test store instead of
the PostgreSQL pool.
"""

import ssl
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from src.keylight.core.config import Settings, get_settings
from src.keylight.core.logging import get_logger

logger = get_logger(__name__)

_engine: AsyncEngine | None = None


def _get_connect_args(settings: Settings) -> dict[str, Any]:
    """Get asyncpg connection arguments including SSL configuration."""
    connect_args: dict[str, Any] = {"timeout": settings.database_connect_timeout}

    ssl_mode = settings.database_ssl_mode
    if ssl_mode != "disable":
        ssl_context = ssl.create_default_context()
        if ssl_mode == "prefer" or ssl_mode == "require":
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
        elif ssl_mode in ("verify-ca", "verify-full"):
            ssl_context.check_hostname = ssl_mode == "verify-full"
            ssl_context.verify_mode = ssl.CERT_REQUIRED
        connect_args["ssl"] = ssl_context

    return connect_args


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_for_url(url: str, settings: Settings | None = None) -> AsyncEngine:
    """Build an engine for ``url``.

    PostgreSQL URLs get a bounded pool: fixed size, fast-failing connect and
    acquire timeouts, and recycling of connections older than the idle timeout.
    SQLite URLs share a single connection so an in-memory database survives
    across statements.
    """
    if url.startswith("sqlite"):
        engine = create_async_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    settings = settings or get_settings()
    return create_async_engine(
        url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout,
        pool_recycle=settings.database_idle_timeout,
        pool_pre_ping=True,
        connect_args=_get_connect_args(settings),
    )


def get_engine() -> AsyncEngine:
    """Get or create the database engine singleton."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_engine_for_url(settings.database_url, settings)
        logger.info("Database engine created", pool_size=settings.database_pool_size)
    return _engine


async def dispose_engine() -> None:
    """Dispose the database engine. Call during shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        logger.info("Database connection pool closed")


def pool_status(engine: AsyncEngine) -> dict[str, int]:
    """Report pool occupancy. Pools without counters report an empty dict."""
    pool = engine.pool
    stats: dict[str, int] = {}
    for name in ("size", "checkedin", "checkedout", "overflow"):
        counter = getattr(pool, name, None)
        if callable(counter):
            stats[name] = counter()
    return stats
