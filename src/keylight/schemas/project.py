"""Project schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.keylight.models.enums import (
    BuildBudget,
    BuyerCategory,
    ConstructionTimeline,
    FinancingPlan,
    LandStatus,
)


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    status: str | None = Field(default=None, max_length=50)
    user_id: int | None = None
    buyer_category: BuyerCategory | None = None
    financing_plan: FinancingPlan | None = None
    interested_in_preferred_lender: bool = False
    land_status: LandStatus | None = None
    lot_address: str | None = None
    needs_help_finding_land: bool = False
    preferred_area_description: str | None = None
    build_budget: BuildBudget | None = None
    construction_timeline: ConstructionTimeline | None = None
    clickup_task_id: str | None = Field(default=None, max_length=255)
    clickup_list_id: str | None = Field(default=None, max_length=255)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("description", "lot_address", "preferred_area_description")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    status: str
    user_id: int | None = None
    buyer_category: str | None = None
    financing_plan: str | None = None
    interested_in_preferred_lender: bool = False
    land_status: str | None = None
    lot_address: str | None = None
    needs_help_finding_land: bool = False
    preferred_area_description: str | None = None
    build_budget: str | None = None
    construction_timeline: str | None = None
    clickup_task_id: str | None = None
    clickup_list_id: str | None = None
    created_at: datetime
    updated_at: datetime
