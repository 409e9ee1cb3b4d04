"""Base repository with common CRUD operations."""

from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Table
from sqlmodel import SQLModel

from src.keylight.core.db.executor import QueryExecutor
from src.keylight.core.db.query import (
    OrderBy,
    build_delete,
    build_insert,
    build_select,
    build_update,
    primary_key,
)
from src.keylight.core.exceptions import StoreError
from src.keylight.models.base import utc_now
from src.keylight.schemas.pagination import Page, Pagination

Row = dict[str, Any]

ModelType = TypeVar("ModelType", bound=SQLModel)


def coerce_id(value: Any) -> int | None:
    """Interpret ``value`` as a positive integer key, or None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
        return number if number > 0 else None
    return None


class BaseRepository(Generic[ModelType]):
    """Table-agnostic CRUD, counting and offset pagination.

    Subclasses fix ``model``; the table is never chosen from request input.
    Rows come back as plain dicts keyed by column name.
    """

    model: type[ModelType]
    default_order: OrderBy | None = OrderBy("created_at", "desc")

    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    @property
    def table(self) -> Table:
        return self.model.__table__  # type: ignore[attr-defined, no-any-return]

    def _order(self, order_by: OrderBy | str | None) -> OrderBy | None:
        if order_by is None:
            return self.default_order
        return OrderBy.parse(order_by)

    async def find_by_id(self, id: Any) -> Row | None:
        query = build_select(self.table, {primary_key(self.table).name: id}, limit=1)
        result = await self.executor.execute(query.statement)
        return result.first()

    async def find_all(
        self,
        conditions: Mapping[str, Any] | None = None,
        order_by: OrderBy | str | None = None,
        limit: int | None = None,
    ) -> list[Row]:
        query = build_select(self.table, conditions, self._order(order_by), limit=limit)
        result = await self.executor.execute(query.statement)
        return result.rows

    async def count(self, conditions: Mapping[str, Any] | None = None) -> int:
        query = build_select(self.table, conditions)
        result = await self.executor.execute(query.count_statement)
        return int(result.scalar() or 0)

    async def exists(self, conditions: Mapping[str, Any]) -> bool:
        return await self.count(conditions) > 0

    async def create(self, data: Mapping[str, Any]) -> Row:
        """Insert a row and return it as stored, defaults included."""
        result = await self.executor.execute(build_insert(self.table, data))
        row = result.first()
        if row is None:
            raise StoreError(f"Insert into {self.table.name} returned no row")
        return row

    async def update_by_id(self, id: Any, data: Mapping[str, Any]) -> Row | None:
        """Update the given columns and stamp ``updated_at``.

        Returns:
            The updated row, or None if no row has this id.
        """
        fields = dict(data)
        if "updated_at" in self.table.c:
            fields["updated_at"] = utc_now()
        result = await self.executor.execute(build_update(self.table, id, fields))
        return result.first()

    async def delete_by_id(self, id: Any) -> Row | None:
        """Hard-delete a row. Returns the removed row, or None if absent."""
        result = await self.executor.execute(build_delete(self.table, id))
        return result.first()

    async def paginate(
        self,
        page: int,
        page_size: int,
        conditions: Mapping[str, Any] | None = None,
        order_by: OrderBy | str | None = None,
        predicates: Sequence[ColumnElement[bool]] = (),
    ) -> Page[Row]:
        """Fetch one 1-based page and the total matching count.

        Raises:
            ValueError: If ``page`` or ``page_size`` is below 1.
        """
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be positive")

        query = build_select(
            self.table,
            conditions,
            self._order(order_by),
            limit=page_size,
            offset=(page - 1) * page_size,
            predicates=predicates,
        )
        result = await self.executor.fetch_page(query)
        return Page[Row](
            data=result.rows,
            pagination=Pagination.from_counts(page, page_size, result.total or 0),
        )
