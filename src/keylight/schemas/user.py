from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    full_name: str = Field(min_length=1, max_length=255)
    email_address: str = Field(max_length=255)
    phone_number: str | None = Field(default=None, max_length=20)
    company_name: str | None = Field(default=None, max_length=255)


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email_address: str
    phone_number: str | None = None
    company_name: str | None = None
    created_at: datetime
    updated_at: datetime


class UserProjectRead(BaseModel):
    """Project summary as listed under its owner."""

    id: int
    name: str
    description: str | None = None
    status: str
    buyer_category: str | None = None
    financing_plan: str | None = None
    land_status: str | None = None
    build_budget: str | None = None
    construction_timeline: str | None = None
    created_at: datetime
    updated_at: datetime


class UserSubmissionRead(BaseModel):
    """Submission as listed under its user, with the linked project's name."""

    id: int
    full_name: str
    email_address: str
    phone_number: str
    company_name: str | None = None
    buyer_category: str
    financing_plan: str
    interested_in_preferred_lender: bool | None = None
    land_status: str
    lot_address: str | None = None
    needs_help_finding_land: bool | None = None
    preferred_area_description: str | None = None
    build_budget: str
    construction_timeline: str
    project_description: str | None = None
    status: str
    admin_notes: str | None = None
    referral_source: str | None = None
    project_id: int | None = None
    project_name: str | None = None
    created_at: datetime
    updated_at: datetime


class EmailCheck(BaseModel):
    email: str
    is_valid: bool
    error: str | None = None
    exists: bool
