"""Intake submission model."""

from datetime import datetime

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from src.keylight.models.base import utc_now
from src.keylight.models.enums import SubmissionStatus

DEFAULT_REFERRAL_SOURCE = "Ritz-Craft"


class Submission(SQLModel, table=True):
    """A lead captured by the public intake form.

    Note: email_address is not unique here. The duplicate check on creation
    is an application-level read-then-insert and is not atomic.
    """

    __tablename__ = "intake_submissions"

    id: int | None = Field(default=None, primary_key=True)
    full_name: str = Field(max_length=255)
    email_address: str = Field(max_length=255, index=True)
    phone_number: str = Field(max_length=20)
    company_name: str | None = Field(default=None, max_length=255)
    buyer_category: str = Field(max_length=50)
    financing_plan: str = Field(max_length=50)
    interested_in_preferred_lender: bool | None = Field(default=False)
    land_status: str = Field(max_length=50)
    lot_address: str | None = Field(default=None, sa_type=Text)
    needs_help_finding_land: bool | None = Field(default=None)
    preferred_area_description: str | None = Field(default=None, sa_type=Text)
    build_budget: str = Field(max_length=50)
    construction_timeline: str = Field(max_length=50)
    project_description: str | None = Field(default=None, sa_type=Text)
    status: str = Field(default=SubmissionStatus.NEW.value, max_length=50, index=True)
    admin_notes: str | None = Field(default=None, sa_type=Text)
    referral_source: str = Field(default=DEFAULT_REFERRAL_SOURCE, max_length=100)
    user_id: int | None = Field(default=None, foreign_key="users.id", ondelete="SET NULL")
    project_id: int | None = Field(
        default=None, foreign_key="projects.id", ondelete="SET NULL"
    )
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())
