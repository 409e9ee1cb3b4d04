"""Repository for intake submissions."""

from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from sqlalchemy import bindparam, func, or_, select

from src.keylight.core.db.query import OrderBy, build_select
from src.keylight.models import BuyerCategory, Submission, SubmissionStatus
from src.keylight.models.base import utc_now
from src.keylight.repositories.base import BaseRepository, Row
from src.keylight.schemas.pagination import Page
from src.keylight.services.submission_rules import validate_status

NEWEST_FIRST = OrderBy("created_at", "desc")
RECENT_WINDOW = timedelta(days=7)

SEARCH_COLUMNS = ("full_name", "email_address", "company_name", "project_description")


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SubmissionRepository(BaseRepository[Submission]):
    """Repository for the ``intake_submissions`` table."""

    model = Submission

    async def find_by_email(self, email: str) -> Row | None:
        """Find the first submission for ``email``, compared lower-cased."""
        query = build_select(
            self.table,
            {"email_address": email.strip().lower()},
            order_by=OrderBy("id", "asc"),
            limit=1,
        )
        result = await self.executor.execute(query.statement)
        return result.first()

    async def update_status(
        self,
        id: int,
        status: str,
        admin_notes: str | None = None,
    ) -> Row | None:
        """Set ``status`` and, when given, ``admin_notes``.

        Notes left as None keep their stored value. Returns None when no
        submission has this id.
        """
        fields: dict[str, Any] = {"status": validate_status(status)}
        if admin_notes is not None:
            fields["admin_notes"] = admin_notes
        return await self.update_by_id(id, fields)

    async def search(self, term: str, page: int = 1, page_size: int = 20) -> Page[Row]:
        """Case-insensitive substring search over name, email, company and description.

        The same bound pattern drives both the page and its count.
        """
        pattern = bindparam("search_pattern", _like_pattern(term))
        matches = or_(*(self.table.c[name].ilike(pattern, escape="\\") for name in SEARCH_COLUMNS))
        return await self.paginate(page, page_size, order_by=NEWEST_FIRST, predicates=[matches])

    async def get_stats(self) -> dict[str, int]:
        """Total, per-status, per-buyer-category and last-7-days counts in one query."""
        c = self.table.c
        cutoff = utc_now() - RECENT_WINDOW
        counters = [func.count().label("total")]
        counters += [
            func.count().filter(c.status == status.value).label(f"{status.value}_count")
            for status in SubmissionStatus
        ]
        counters += [
            func.count().filter(c.buyer_category == category.value).label(f"{category.value}_count")
            for category in BuyerCategory
        ]
        counters.append(func.count().filter(c.created_at >= cutoff).label("recent_count"))

        result = await self.executor.execute(select(*counters).select_from(self.table))
        row = result.first() or {}
        return {key: int(value or 0) for key, value in row.items()}

    async def find_recent(self, days: int = 7, limit: int = 10) -> list[Row]:
        """Newest submissions created within the last ``days`` days."""
        cutoff = utc_now() - timedelta(days=days)
        query = build_select(
            self.table,
            order_by=NEWEST_FIRST,
            limit=limit,
            predicates=[self.table.c.created_at >= cutoff],
        )
        result = await self.executor.execute(query.statement)
        return result.rows

    async def find_for_dashboard(
        self,
        filters: Mapping[str, Any] | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[Page[Row], dict[str, int]]:
        """Filtered newest-first page plus table-wide stats."""
        result = await self.paginate(page, page_size, filters, NEWEST_FIRST)
        stats = await self.get_stats()
        return result, stats
