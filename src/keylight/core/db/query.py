"""Parameterized statement builders over SQLAlchemy Core tables.

Column names are resolved against the table definition, so only declared
columns can reach the SQL text. Every value travels as a bound parameter.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from sqlalchemy import (
    Column,
    ColumnElement,
    Delete,
    Insert,
    Select,
    Table,
    Update,
    delete,
    func,
    insert,
    select,
    update,
)

Direction = Literal["asc", "desc"]


@dataclass(frozen=True, slots=True)
class OrderBy:
    """Column + direction ordering descriptor."""

    column: str
    direction: Direction = "asc"

    def __post_init__(self) -> None:
        if self.direction not in ("asc", "desc"):
            raise ValueError(f"Invalid sort direction: {self.direction!r}")

    @classmethod
    def parse(cls, value: "str | OrderBy") -> "OrderBy":
        """Parse ``"created_at DESC"`` style clauses."""
        if isinstance(value, OrderBy):
            return value
        parts = value.split()
        if not 1 <= len(parts) <= 2:
            raise ValueError(f"Invalid order clause: {value!r}")
        direction = parts[1].lower() if len(parts) == 2 else "asc"
        if direction not in ("asc", "desc"):
            raise ValueError(f"Invalid sort direction: {parts[1]!r}")
        return cls(parts[0], direction)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class SelectQuery:
    """A page query and the COUNT query sharing its WHERE clause."""

    statement: Select
    count_statement: Select


def column_for(table: Table, name: str) -> Column:
    """Resolve ``name`` to a column of ``table``.

    Raises:
        ValueError: If the table has no such column.
    """
    if name not in table.c:
        raise ValueError(f"Unknown column '{name}' for table '{table.name}'")
    return table.c[name]


def primary_key(table: Table) -> Column:
    columns = list(table.primary_key.columns)
    if len(columns) != 1:
        raise ValueError(f"Table '{table.name}' must have a single-column primary key")
    return columns[0]


def where_clauses(table: Table, conditions: Mapping[str, Any] | None) -> list[ColumnElement[bool]]:
    """Exact-match predicates for each ``column -> value`` pair."""
    return [column_for(table, name) == value for name, value in (conditions or {}).items()]


def order_clauses(table: Table, order_by: OrderBy | None) -> list[Any]:
    """ORDER BY terms, with the primary key appended as a tiebreaker."""
    if order_by is None:
        return []
    terms = []
    for column in (column_for(table, order_by.column), primary_key(table)):
        if terms and column.name == order_by.column:
            continue
        terms.append(column.desc() if order_by.direction == "desc" else column.asc())
    return terms


def _check_non_negative(name: str, value: int | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer")


def _values(table: Table, fields: Mapping[str, Any]) -> dict[str, Any]:
    if not fields:
        raise ValueError("At least one field is required")
    return {column_for(table, name).name: value for name, value in fields.items()}


def build_select(
    table: Table,
    conditions: Mapping[str, Any] | None = None,
    order_by: OrderBy | None = None,
    limit: int | None = None,
    offset: int | None = None,
    predicates: Sequence[ColumnElement[bool]] = (),
) -> SelectQuery:
    """Build a SELECT over ``table`` plus the matching COUNT.

    Args:
        table: Table to read.
        conditions: Column -> value exact matches, ANDed.
        order_by: Optional ordering.
        limit: Maximum rows, or None for no limit.
        offset: Rows to skip, or None.
        predicates: Extra prebuilt predicates, ANDed with ``conditions``.
    """
    _check_non_negative("limit", limit)
    _check_non_negative("offset", offset)

    clauses = [*where_clauses(table, conditions), *predicates]

    statement = select(table)
    count_statement = select(func.count().label("count")).select_from(table)
    if clauses:
        statement = statement.where(*clauses)
        count_statement = count_statement.where(*clauses)

    ordering = order_clauses(table, order_by)
    if ordering:
        statement = statement.order_by(*ordering)
    if limit is not None:
        statement = statement.limit(limit)
    if offset is not None:
        statement = statement.offset(offset)

    return SelectQuery(statement=statement, count_statement=count_statement)


def build_insert(table: Table, fields: Mapping[str, Any]) -> Insert:
    """INSERT returning the full inserted row."""
    return insert(table).values(_values(table, fields)).returning(*table.c)


def build_update(table: Table, id: Any, fields: Mapping[str, Any]) -> Update:
    """UPDATE by primary key returning the full row; no row means not found."""
    return (
        update(table)
        .where(primary_key(table) == id)
        .values(_values(table, fields))
        .returning(*table.c)
    )


def build_delete(table: Table, id: Any) -> Delete:
    """DELETE by primary key returning the removed row."""
    return delete(table).where(primary_key(table) == id).returning(*table.c)
