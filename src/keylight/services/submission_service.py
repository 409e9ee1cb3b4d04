"""Submission workflows: intake, admin review, search and reporting."""

import math
from collections.abc import Mapping
from typing import Any

from src.keylight.core.exceptions import DuplicateError, NotFoundError, ValidationError
from src.keylight.core.logging import get_logger
from src.keylight.models import SubmissionStatus
from src.keylight.models.enums import enum_values
from src.keylight.repositories import Row, SubmissionRepository, coerce_id
from src.keylight.schemas.pagination import Page, clamp_page, clamp_page_size
from src.keylight.services.submission_rules import (
    sanitize_submission,
    validate_status,
    validate_submission,
)

logger = get_logger(__name__)

MIN_SEARCH_LENGTH = 2
MAX_RECENT_LIMIT = 100
MAX_RECENT_DAYS = 3650

# stat key -> counter it is a share of
PERCENTAGES = {
    "new_percentage": "new_count",
    "qualified_percentage": "qualified_count",
    "homebuyer_percentage": "homebuyer_count",
    "developer_percentage": "developer_count",
}


def _percentage(part: int, total: int) -> int:
    """Whole-number percentage, halves rounded up."""
    return math.floor(part / total * 100 + 0.5)


class SubmissionService:
    """Submission business logic. Validation always runs before the store is touched."""

    def __init__(self, submission_repo: SubmissionRepository):
        self.submission_repo = submission_repo

    @staticmethod
    def _submission_id(id: Any) -> int:
        key = coerce_id(id)
        if key is None:
            raise ValidationError("Invalid submission ID")
        return key

    async def create_submission(self, data: Mapping[str, Any]) -> Row:
        """Sanitize, validate and store a new submission.

        The duplicate email check is a read followed by an insert. Two
        concurrent submissions with the same email can both get through.

        Raises:
            ValidationError: The payload violates one or more rules.
            DuplicateError: A submission with this email already exists.
        """
        submission = sanitize_submission(data)
        validate_submission(submission)

        existing = await self.submission_repo.find_by_email(submission["email_address"])
        if existing is not None:
            raise DuplicateError("A submission with this email already exists")

        columns = self.submission_repo.table.c
        created = await self.submission_repo.create(
            {key: value for key, value in submission.items() if key in columns}
        )
        logger.info(
            "Submission created",
            submission_id=created["id"],
            buyer_category=created["buyer_category"],
            build_budget=created["build_budget"],
        )
        return created

    async def get_submission(self, id: Any) -> Row:
        submission = await self.submission_repo.find_by_id(self._submission_id(id))
        if submission is None:
            raise NotFoundError("Submission not found")
        return submission

    async def list_submissions(
        self,
        filters: Mapping[str, Any] | None = None,
        page: int | None = 1,
        page_size: int | None = 20,
    ) -> tuple[Page[Row], dict[str, int]]:
        """Filtered, newest-first page with table-wide stats attached."""
        return await self.submission_repo.find_for_dashboard(
            filters or {}, clamp_page(page), clamp_page_size(page_size)
        )

    async def get_submissions_by_status(
        self,
        status: str,
        page: int | None = 1,
        page_size: int | None = 20,
    ) -> tuple[Page[Row], dict[str, int]]:
        allowed = enum_values(SubmissionStatus)
        if status not in allowed:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(allowed)}")
        return await self.list_submissions({"status": status}, page, page_size)

    async def update_submission_status(
        self,
        id: Any,
        status: Any,
        admin_notes: str | None = None,
    ) -> Row:
        """Move a submission to ``status``; any valid status may follow any other."""
        key = self._submission_id(id)
        if not status:
            raise ValidationError("Status is required")
        validate_status(status)

        updated = await self.submission_repo.update_status(key, status, admin_notes)
        if updated is None:
            raise NotFoundError("Submission not found")
        logger.info("Submission status updated", submission_id=key, status=status)
        return updated

    async def search_submissions(
        self,
        term: str | None,
        page: int | None = 1,
        page_size: int | None = 20,
    ) -> tuple[Page[Row], str]:
        """Search and return the page together with the trimmed term."""
        term = (term or "").strip()
        if len(term) < MIN_SEARCH_LENGTH:
            raise ValidationError("Search term must be at least 2 characters")
        result = await self.submission_repo.search(
            term, clamp_page(page), clamp_page_size(page_size)
        )
        return result, term

    async def get_stats(self) -> dict[str, int]:
        """Counters plus percentages; percentages are omitted for an empty table."""
        stats = await self.submission_repo.get_stats()
        total = stats.get("total", 0)
        if total > 0:
            for key, counter in PERCENTAGES.items():
                stats[key] = _percentage(stats.get(counter, 0), total)
        return stats

    async def delete_submission(self, id: Any) -> Row:
        deleted = await self.submission_repo.delete_by_id(self._submission_id(id))
        if deleted is None:
            raise NotFoundError("Submission not found")
        logger.info("Submission deleted", submission_id=deleted["id"])
        return deleted

    async def get_recent_submissions(self, days: int = 7, limit: int = 10) -> list[Row]:
        if days < 1 or limit < 1:
            raise ValidationError("days and limit must be positive integers")
        if days > MAX_RECENT_DAYS:
            raise ValidationError(f"days must be at most {MAX_RECENT_DAYS}")
        return await self.submission_repo.find_recent(days, min(limit, MAX_RECENT_LIMIT))
