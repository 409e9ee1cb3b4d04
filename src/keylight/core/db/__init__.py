"""Database utilities - engine, statement builders, executor."""

from src.keylight.core.db.engine import (
    create_engine_for_url,
    dispose_engine,
    get_engine,
    pool_status,
)
from src.keylight.core.db.executor import QueryExecutor, RowSet
from src.keylight.core.db.query import (
    OrderBy,
    SelectQuery,
    build_delete,
    build_insert,
    build_select,
    build_update,
)

__all__ = [
    # Engine
    "create_engine_for_url",
    "dispose_engine",
    "get_engine",
    "pool_status",
    # Executor
    "QueryExecutor",
    "RowSet",
    # Statement builders
    "OrderBy",
    "SelectQuery",
    "build_delete",
    "build_insert",
    "build_select",
    "build_update",
]
