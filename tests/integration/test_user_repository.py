"""Tests for UserRepository lookups and relations."""

from datetime import UTC, timedelta, timezone

import pytest

from src.keylight.core.db import QueryExecutor
from src.keylight.repositories import ProjectRepository, SubmissionRepository, UserRepository
from tests.factories import utc_now
from tests.helpers import create_project, create_submission, create_user

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestEmailLookup:
    async def test_case_insensitive(self, executor: QueryExecutor, user_repository: UserRepository):
        created = await create_user(executor, email_address="Ann.Owner@Example.com")

        found = await user_repository.find_by_email(" ann.owner@EXAMPLE.com ")

        assert found is not None
        assert found["id"] == created["id"]
        assert await user_repository.email_exists("ANN.OWNER@example.com")

    async def test_unknown_email(self, user_repository: UserRepository):
        assert await user_repository.find_by_email("nobody@example.com") is None
        assert not await user_repository.email_exists("nobody@example.com")

    @pytest.mark.parametrize("value", [None, "", "   ", 42])
    async def test_malformed_input(self, user_repository: UserRepository, value):
        assert await user_repository.find_by_email(value) is None
        assert await user_repository.email_exists(value) is False


class TestRelations:
    async def test_user_projects_newest_first(
        self, executor: QueryExecutor, user_repository: UserRepository
    ):
        user = await create_user(executor)
        other = await create_user(executor)
        now = utc_now()
        older = await create_project(
            executor, user_id=user["id"], created_at=now - timedelta(days=1)
        )
        newer = await create_project(executor, user_id=user["id"], created_at=now)
        await create_project(executor, user_id=other["id"])

        projects = await user_repository.get_user_projects(user["id"])

        assert [p["id"] for p in projects] == [newer["id"], older["id"]]
        assert "clickup_task_id" not in projects[0]
        assert "user_id" not in projects[0]

    async def test_user_submissions_include_project_name(
        self, executor: QueryExecutor, user_repository: UserRepository
    ):
        user = await create_user(executor)
        project = await create_project(executor, user_id=user["id"], name="Lakeside")
        linked = await create_submission(
            executor, user_id=user["id"], project_id=project["id"], created_at=utc_now()
        )
        unlinked = await create_submission(
            executor, user_id=user["id"], created_at=utc_now() - timedelta(hours=1)
        )

        submissions = await user_repository.get_user_submissions(str(user["id"]))

        assert [s["id"] for s in submissions] == [linked["id"], unlinked["id"]]
        assert submissions[0]["project_name"] == "Lakeside"
        assert submissions[1]["project_name"] is None
        assert "user_id" not in submissions[0]

    @pytest.mark.parametrize("bad_id", ["abc", "-1", None, 0])
    async def test_invalid_ids_give_empty_lists(self, user_repository: UserRepository, bad_id):
        assert await user_repository.get_user_projects(bad_id) == []
        assert await user_repository.get_user_submissions(bad_id) == []

    async def test_deleting_user_cascades_projects_and_unlinks_submissions(
        self,
        executor: QueryExecutor,
        user_repository: UserRepository,
        project_repository: ProjectRepository,
        submission_repository: SubmissionRepository,
    ):
        user = await create_user(executor)
        project = await create_project(executor, user_id=user["id"])
        submission = await create_submission(
            executor, user_id=user["id"], project_id=project["id"]
        )

        await user_repository.delete_by_id(user["id"])

        assert await project_repository.find_by_id(project["id"]) is None
        kept = await submission_repository.find_by_id(submission["id"])
        assert kept is not None
        assert kept["user_id"] is None
        assert kept["project_id"] is None


class TestSearch:
    async def test_by_email_and_name(
        self, executor: QueryExecutor, user_repository: UserRepository
    ):
        ann = await create_user(executor, full_name="Ann Lee", email_address="ann@acme.com")
        await create_user(executor, full_name="Bob Lee", email_address="bob@other.com")

        by_email = await user_repository.search_users(email="ACME")
        both = await user_repository.search_users(email="acme", name="lee")
        by_name = await user_repository.search_users(name="LEE")

        assert [u["id"] for u in by_email] == [ann["id"]]
        assert [u["id"] for u in both] == [ann["id"]]
        assert [u["full_name"] for u in by_name] == ["Ann Lee", "Bob Lee"]

    async def test_no_criteria(self, executor: QueryExecutor, user_repository: UserRepository):
        await create_user(executor)

        assert await user_repository.search_users() == []
        assert await user_repository.search_users(email="  ", name="") == []


class TestFilters:
    async def test_sort_and_page(self, executor: QueryExecutor, user_repository: UserRepository):
        for name in ("Cara", "Abe", "Bea"):
            await create_user(executor, full_name=name)

        rows = await user_repository.find_users_with_filters(
            limit=2, offset=1, sort_by="full_name", sort_order="asc"
        )

        assert [u["full_name"] for u in rows] == ["Bea", "Cara"]

    async def test_unknown_sort_falls_back_to_newest_first(
        self, executor: QueryExecutor, user_repository: UserRepository
    ):
        now = utc_now()
        old = await create_user(executor, created_at=now - timedelta(days=3))
        new = await create_user(executor, created_at=now)

        rows = await user_repository.find_users_with_filters(
            sort_by="password; DROP TABLE users", sort_order="sideways"
        )

        assert [u["id"] for u in rows] == [new["id"], old["id"]]

    async def test_created_window(self, executor: QueryExecutor, user_repository: UserRepository):
        now = utc_now()
        await create_user(executor, created_at=now - timedelta(days=10))
        inside = await create_user(executor, created_at=now - timedelta(days=5))
        await create_user(executor, created_at=now)

        rows = await user_repository.find_users_with_filters(
            created_after=now - timedelta(days=7),
            created_before=now - timedelta(days=1),
        )

        assert [u["id"] for u in rows] == [inside["id"]]

    async def test_created_window_accepts_offset_datetimes(
        self, executor: QueryExecutor, user_repository: UserRepository
    ):
        now = utc_now()
        await create_user(executor, created_at=now - timedelta(days=3))
        inside = await create_user(executor, created_at=now - timedelta(hours=1))
        minus_five = timezone(timedelta(hours=-5))
        after = (now - timedelta(days=1)).replace(tzinfo=UTC).astimezone(minus_five)

        rows = await user_repository.find_users_with_filters(created_after=after)

        assert [u["id"] for u in rows] == [inside["id"]]

    @pytest.mark.parametrize(("limit", "offset"), [(0, 0), (-1, 0), (10, -1)])
    async def test_bad_bounds_give_empty(
        self, executor: QueryExecutor, user_repository: UserRepository, limit, offset
    ):
        await create_user(executor)

        assert await user_repository.find_users_with_filters(limit=limit, offset=offset) == []


class TestTimestamps:
    async def test_create_stamps_naive_utc(self, user_repository: UserRepository):
        before = utc_now()

        created = await user_repository.create(
            {"full_name": "Ann Owner", "email_address": "ann@example.com"}
        )

        assert created["created_at"].tzinfo is None
        assert created["created_at"] >= before - timedelta(seconds=1)

    async def test_update_restamps_updated_at(self, user_repository: UserRepository):
        created = await user_repository.create(
            {"full_name": "Ann Owner", "email_address": "ann@example.com"}
        )

        updated = await user_repository.update_by_id(created["id"], {"full_name": "Ann O."})

        assert updated is not None
        assert updated["updated_at"].tzinfo is None
        assert updated["updated_at"] >= created["updated_at"]
