"""Repository for users and their related projects and submissions."""

from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, func, select

from src.keylight.core.db.query import OrderBy, build_select
from src.keylight.models import Project, Submission, User
from src.keylight.models.base import as_naive_utc
from src.keylight.repositories.base import BaseRepository, Row, coerce_id

SORTABLE_FIELDS = ("full_name", "email_address", "created_at", "updated_at")
DEFAULT_SORT_FIELD = "created_at"

PROJECT_SUMMARY_COLUMNS = (
    "id",
    "name",
    "description",
    "status",
    "buyer_category",
    "financing_plan",
    "land_status",
    "build_budget",
    "construction_timeline",
    "created_at",
    "updated_at",
)


def _normalized(value: Any) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip().lower()


class UserRepository(BaseRepository[User]):
    """Repository for the ``users`` table.

    Lookups that take free-form input treat malformed values as "not found"
    and return without querying.
    """

    model = User

    def _email_matches(self, email: str) -> ColumnElement[bool]:
        return func.lower(self.table.c.email_address) == email

    async def email_exists(self, email: Any) -> bool:
        normalized = _normalized(email)
        if normalized is None:
            return False
        query = build_select(self.table, predicates=[self._email_matches(normalized)])
        result = await self.executor.execute(query.count_statement)
        return int(result.scalar() or 0) > 0

    async def find_by_email(self, email: Any) -> Row | None:
        normalized = _normalized(email)
        if normalized is None:
            return None
        query = build_select(self.table, limit=1, predicates=[self._email_matches(normalized)])
        result = await self.executor.execute(query.statement)
        return result.first()

    async def get_user_projects(self, user_id: Any) -> list[Row]:
        """Projects owned by the user, newest first. Invalid ids give []."""
        key = coerce_id(user_id)
        if key is None:
            return []
        projects = Project.__table__.c  # type: ignore[attr-defined]
        statement = (
            select(*(projects[name] for name in PROJECT_SUMMARY_COLUMNS))
            .where(projects.user_id == key)
            .order_by(projects.created_at.desc(), projects.id.desc())
        )
        result = await self.executor.execute(statement)
        return result.rows

    async def get_user_submissions(self, user_id: Any) -> list[Row]:
        """Submissions linked to the user with the linked project's name, newest first."""
        key = coerce_id(user_id)
        if key is None:
            return []
        submissions = Submission.__table__  # type: ignore[attr-defined]
        projects = Project.__table__  # type: ignore[attr-defined]
        columns = [column for column in submissions.c if column.name != "user_id"]
        statement = (
            select(*columns, projects.c.name.label("project_name"))
            .select_from(
                submissions.outerjoin(projects, submissions.c.project_id == projects.c.id)
            )
            .where(submissions.c.user_id == key)
            .order_by(submissions.c.created_at.desc(), submissions.c.id.desc())
        )
        result = await self.executor.execute(statement)
        return result.rows

    async def search_users(self, email: Any = None, name: Any = None) -> list[Row]:
        """Partial, case-insensitive match on email and/or name, ANDed.

        With no usable criterion the result is empty rather than every user.
        """
        predicates = []
        email_term = _normalized(email)
        if email_term is not None:
            predicates.append(self.table.c.email_address.ilike(f"%{email_term}%"))
        name_term = _normalized(name)
        if name_term is not None:
            predicates.append(self.table.c.full_name.ilike(f"%{name_term}%"))
        if not predicates:
            return []

        query = build_select(
            self.table, order_by=OrderBy("full_name", "asc"), predicates=predicates
        )
        result = await self.executor.execute(query.statement)
        return result.rows

    async def find_users_with_filters(
        self,
        limit: int = 50,
        offset: int = 0,
        sort_by: str = DEFAULT_SORT_FIELD,
        sort_order: str = "DESC",
        created_after: datetime | None = None,
        created_before: datetime | None = None,
    ) -> list[Row]:
        """Page through users with an allow-listed sort and a creation date window.

        Unknown sort fields fall back to ``created_at`` and unknown orders to
        descending. A non-positive ``limit`` or negative ``offset`` gives [].
        """
        if limit <= 0 or offset < 0:
            return []

        column = sort_by if sort_by in SORTABLE_FIELDS else DEFAULT_SORT_FIELD
        direction = "asc" if (sort_order or "").upper() == "ASC" else "desc"

        predicates = []
        if created_after is not None:
            predicates.append(self.table.c.created_at >= as_naive_utc(created_after))
        if created_before is not None:
            predicates.append(self.table.c.created_at <= as_naive_utc(created_before))

        query = build_select(
            self.table,
            order_by=OrderBy(column, direction),
            limit=limit,
            offset=offset,
            predicates=predicates,
        )
        result = await self.executor.execute(query.statement)
        return result.rows
