"""Test helper functions for common data creation patterns."""

from typing import Any

from sqlmodel import SQLModel

from src.keylight.core.db import QueryExecutor, build_insert
from tests.factories import ProjectFactory, SubmissionFactory, UserFactory


def submission_payload(**overrides: Any) -> dict[str, Any]:
    """A complete, valid intake form payload.

    Describes a homebuyer who owns land. Keys set to None in ``overrides``
    are removed from the payload.

    Args:
        **overrides: Fields to replace or drop

    Returns:
        JSON-ready payload dict
    """
    payload: dict[str, Any] = {
        "full_name": "Jane Buyer",
        "email_address": "jane.buyer@example.com",
        "phone_number": "(555) 123-4567",
        "company_name": "",
        "buyer_category": "homebuyer",
        "financing_plan": "self_funding",
        "interested_in_preferred_lender": False,
        "land_status": "own_land",
        "lot_address": "12 Orchard Lane",
        "needs_help_finding_land": False,
        "build_budget": "250k_350k",
        "construction_timeline": "3_to_6_months",
        "project_description": "Three bedroom ranch with a walkout basement",
    }
    payload.update(overrides)
    return {key: value for key, value in payload.items() if value is not None}


async def insert_model(executor: QueryExecutor, instance: SQLModel) -> dict[str, Any]:
    """Insert a factory-built model and return the stored row.

    Args:
        executor: Executor bound to the test store
        instance: Unsaved model instance; None fields are left to the store

    Returns:
        The inserted row
    """
    fields = {key: value for key, value in instance.model_dump().items() if value is not None}
    table = type(instance).__table__  # type: ignore[attr-defined]
    result = await executor.execute(build_insert(table, fields))
    row = result.first()
    assert row is not None
    return row


async def create_user(executor: QueryExecutor, **kwargs: Any) -> dict[str, Any]:
    """Insert a user built by UserFactory."""
    return await insert_model(executor, UserFactory.build(**kwargs))


async def create_project(executor: QueryExecutor, **kwargs: Any) -> dict[str, Any]:
    """Insert a project built by ProjectFactory."""
    return await insert_model(executor, ProjectFactory.build(**kwargs))


async def create_submission(executor: QueryExecutor, **kwargs: Any) -> dict[str, Any]:
    """Insert a submission built by SubmissionFactory."""
    return await insert_model(executor, SubmissionFactory.build(**kwargs))
