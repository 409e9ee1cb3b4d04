"""Project model."""

from datetime import datetime

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from src.keylight.models.base import utc_now
from src.keylight.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """Build project, optionally owned by a user (deleted with the user).

    The buyer/financing/land/budget/timeline columns reuse the submission
    vocabulary. ``clickup_*`` columns correlate the project with the external
    task tracker.
    """

    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    description: str | None = Field(default=None, sa_type=Text)
    status: str = Field(default=ProjectStatus.PLANNING.value, max_length=50)
    user_id: int | None = Field(
        default=None, foreign_key="users.id", ondelete="CASCADE", index=True
    )
    buyer_category: str | None = Field(default=None, max_length=50)
    financing_plan: str | None = Field(default=None, max_length=50)
    interested_in_preferred_lender: bool = Field(default=False)
    land_status: str | None = Field(default=None, max_length=50)
    lot_address: str | None = Field(default=None, sa_type=Text)
    needs_help_finding_land: bool = Field(default=False)
    preferred_area_description: str | None = Field(default=None, sa_type=Text)
    build_budget: str | None = Field(default=None, max_length=50)
    construction_timeline: str | None = Field(default=None, max_length=50)
    clickup_task_id: str | None = Field(default=None, max_length=255)
    clickup_list_id: str | None = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())
