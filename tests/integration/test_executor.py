"""Tests for QueryExecutor against a live store."""

import pytest
from sqlalchemy import select

from src.keylight.core.db import QueryExecutor, build_insert, build_select
from src.keylight.core.exceptions import StoreError
from src.keylight.models import User

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]

users = User.__table__  # type: ignore[attr-defined]


async def test_text_statement_with_params(executor: QueryExecutor):
    result = await executor.execute("SELECT CAST(:value AS INTEGER) AS value", {"value": 41})

    assert result.rows == [{"value": 41}]
    assert result.scalar() == 41


async def test_insert_returns_row_with_defaults(executor: QueryExecutor):
    result = await executor.execute(
        build_insert(users, {"full_name": "Ann", "email_address": "ann@example.com"})
    )
    row = result.first()

    assert row is not None
    assert row["id"] > 0
    assert row["created_at"] is not None
    assert result.rowcount == 1


async def test_select_without_rows(executor: QueryExecutor):
    result = await executor.execute(select(users).where(users.c.id == 999))

    assert result.rows == []
    assert result.first() is None


async def test_fetch_page_sets_total(executor: QueryExecutor):
    for n in range(3):
        await executor.execute(
            build_insert(users, {"full_name": f"User {n}", "email_address": f"u{n}@example.com"})
        )

    page = await executor.fetch_page(build_select(users, limit=2, offset=0))

    assert len(page) == 2
    assert page.total == 3


async def test_unique_violation_is_wrapped(executor: QueryExecutor):
    fields = {"full_name": "Ann", "email_address": "ann@example.com"}
    await executor.execute(build_insert(users, fields))

    with pytest.raises(StoreError) as exc_info:
        await executor.execute(build_insert(users, fields))

    assert exc_info.value.code == "23505"
    assert exc_info.value.original is not None


async def test_syntax_error_is_wrapped(executor: QueryExecutor):
    with pytest.raises(StoreError):
        await executor.execute("SELEC nothing")


async def test_failed_statement_leaves_store_usable(executor: QueryExecutor):
    with pytest.raises(StoreError):
        await executor.execute("SELECT * FROM missing_table")

    assert (await executor.execute("SELECT 1 AS ok")).scalar() == 1


async def test_unbindable_parameter_is_wrapped(executor: QueryExecutor):
    with pytest.raises(StoreError) as exc_info:
        await executor.execute("SELECT CAST(:value AS INTEGER) AS value", {"value": 10**19})

    assert exc_info.value.original is not None
    assert (await executor.execute("SELECT 1 AS ok")).scalar() == 1
