"""Submission schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.keylight.schemas.response import PageResponse


class SubmissionCreate(BaseModel):
    """Public intake form payload.

    Every field is optional here so that missing and malformed values are
    reported together by the submission rules rather than one at a time.
    """

    model_config = ConfigDict(extra="ignore")

    full_name: str | None = None
    email_address: str | None = None
    phone_number: str | None = None
    company_name: str | None = None
    buyer_category: str | None = None
    financing_plan: str | None = None
    interested_in_preferred_lender: bool | None = None
    land_status: str | None = None
    lot_address: str | None = None
    needs_help_finding_land: bool | None = None
    preferred_area_description: str | None = None
    build_budget: str | None = None
    construction_timeline: str | None = None
    project_description: str | None = None
    referral_source: str | None = None


class StatusUpdate(BaseModel):
    """Admin status change. ``admin_notes`` omitted leaves the notes untouched."""

    status: str | None = None
    admin_notes: str | None = None


class SubmissionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
    user_id: int | None = None
    project_id: int | None = None
    created_at: datetime
    updated_at: datetime


class SubmissionCounts(BaseModel):
    """Aggregate counters computed in a single pass over the table."""

    total: int = 0
    new_count: int = 0
    reviewed_count: int = 0
    qualified_count: int = 0
    disqualified_count: int = 0
    contacted_count: int = 0
    homebuyer_count: int = 0
    developer_count: int = 0
    recent_count: int = 0


class SubmissionStats(SubmissionCounts):
    """Counters plus whole-number percentages, present only when total > 0."""

    new_percentage: int | None = None
    qualified_percentage: int | None = None
    homebuyer_percentage: int | None = None
    developer_percentage: int | None = None


class SubmissionFilters(BaseModel):
    status: str | None = None
    buyer_category: str | None = None
    build_budget: str | None = None
    construction_timeline: str | None = None

    def conditions(self) -> dict[str, str]:
        return {key: value for key, value in self.model_dump().items() if value}


class SubmissionPage(PageResponse[SubmissionRead]):
    stats: SubmissionCounts


class SubmissionListResponse(SubmissionPage):
    filters: dict[str, str] = Field(default_factory=dict)


class SubmissionStatusListResponse(SubmissionPage):
    status: str


class SubmissionSearchResponse(PageResponse[SubmissionRead]):
    model_config = ConfigDict(populate_by_name=True)

    search_term: str = Field(alias="searchTerm")


class RecentSubmissionsResponse(BaseModel):
    success: bool = True
    data: list[SubmissionRead]
    count: int
    days: int
