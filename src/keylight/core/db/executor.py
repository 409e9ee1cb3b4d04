"""Single entry point for running statements against the store.

Every statement runs in its own short transaction on a pooled connection.
Driver and SQLAlchemy failures, including parameters the driver cannot bind,
leave this module as ``StoreError``.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Executable, text
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncEngine

from src.keylight.core.db.engine import get_engine
from src.keylight.core.db.query import SelectQuery
from src.keylight.core.exceptions import StoreError, StoreUnavailableError
from src.keylight.core.logging import get_logger

logger = get_logger(__name__)

# SQLite reports constraint failures by message only
_SQLITE_SQLSTATES: tuple[tuple[str, str], ...] = (
    ("UNIQUE constraint failed", "23505"),
    ("FOREIGN KEY constraint failed", "23503"),
    ("NOT NULL constraint failed", "23502"),
    ("no such table", "42P01"),
)

_SQL_PREVIEW_LENGTH = 200


@dataclass(slots=True)
class RowSet:
    """Rows returned by a statement.

    Attributes:
        rows: Result rows as plain dicts keyed by column name.
        rowcount: Rows affected, as reported by the driver.
        total: Matching row count ignoring LIMIT/OFFSET, set by ``fetch_page``.
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0
    total: int | None = None

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def first(self) -> dict[str, Any] | None:
        return self.rows[0] if self.rows else None

    def scalar(self) -> Any:
        row = self.first()
        if row is None:
            return None
        return next(iter(row.values()), None)


def sqlstate_for(exc: BaseException) -> str | None:
    """Extract a SQLSTATE from a wrapped driver error.

    asyncpg and psycopg expose the code directly. SQLite only has a message,
    which is mapped onto the equivalent PostgreSQL code.
    """
    orig = getattr(exc, "orig", None) or exc
    for candidate in (orig, getattr(orig, "__cause__", None)):
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if isinstance(code, str) and code:
            return code

    message = str(orig)
    for pattern, code in _SQLITE_SQLSTATES:
        if pattern in message:
            return code
    return None


def to_store_error(exc: BaseException) -> StoreError:
    """Wrap ``exc`` in the matching store error."""
    if isinstance(exc, sa_exc.TimeoutError):
        return StoreUnavailableError(
            "Timed out waiting for a database connection", original=exc
        )
    if isinstance(exc, (OSError, TimeoutError)):
        return StoreUnavailableError(f"Database unreachable: {exc}", original=exc)

    code = sqlstate_for(exc)
    message = str(getattr(exc, "orig", None) or exc)
    disconnected = isinstance(exc, sa_exc.DBAPIError) and exc.connection_invalidated
    if (code and code.startswith("08")) or disconnected:
        return StoreUnavailableError(message, code=code, original=exc)
    return StoreError(message, code=code, original=exc)


def _preview(statement: Executable) -> str:
    sql = " ".join(str(statement).split())
    if len(sql) > _SQL_PREVIEW_LENGTH:
        return sql[:_SQL_PREVIEW_LENGTH] + "..."
    return sql


class QueryExecutor:
    """Runs parameterized statements against the pooled engine."""

    def __init__(self, engine: AsyncEngine | None = None):
        self.engine = engine or get_engine()

    async def execute(
        self,
        statement: Executable | str,
        params: Mapping[str, Any] | None = None,
    ) -> RowSet:
        """Run one statement in its own transaction.

        Args:
            statement: A SQLAlchemy statement, or SQL text with ``:name`` placeholders.
            params: Bound parameter values.

        Returns:
            The fully materialized rows and the affected row count.

        Raises:
            StoreUnavailableError: The store is unreachable or the pool is exhausted.
            StoreError: Any other failure, carrying the SQLSTATE when known.
        """
        if isinstance(statement, str):
            statement = text(statement)

        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(statement, dict(params) if params else None)
                rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
                return RowSet(rows=rows, rowcount=max(result.rowcount, 0))
        except (sa_exc.SQLAlchemyError, OSError, TimeoutError, OverflowError, ValueError) as e:
            error = to_store_error(e)
            logger.error(
                "Database query failed",
                sql=_preview(statement),
                code=error.code,
                unavailable=isinstance(error, StoreUnavailableError),
                error=error.message,
            )
            raise error from e

    async def fetch_page(self, query: SelectQuery) -> RowSet:
        """Run a page query and its COUNT, returning rows with ``total`` set."""
        count = await self.execute(query.count_statement)
        page = await self.execute(query.statement)
        page.total = int(count.scalar() or 0)
        return page
