"""Model exports.

Import from here: `from src.keylight.models import Submission, User`
"""

from src.keylight.models.enums import (
    BuildBudget,
    BuyerCategory,
    ConstructionTimeline,
    FinancingPlan,
    LandStatus,
    ProjectStatus,
    SubmissionStatus,
)
from src.keylight.models.project import Project
from src.keylight.models.submission import DEFAULT_REFERRAL_SOURCE, Submission
from src.keylight.models.user import User

__all__ = [
    # Enums
    "BuildBudget",
    "BuyerCategory",
    "ConstructionTimeline",
    "FinancingPlan",
    "LandStatus",
    "ProjectStatus",
    "SubmissionStatus",
    # Tables
    "Project",
    "Submission",
    "User",
    # Constants
    "DEFAULT_REFERRAL_SOURCE",
]
