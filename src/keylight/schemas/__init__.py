from src.keylight.schemas.pagination import Page, Pagination
from src.keylight.schemas.project import ProjectCreate, ProjectRead
from src.keylight.schemas.response import DataResponse, MessageResponse, PageResponse
from src.keylight.schemas.submission import (
    RecentSubmissionsResponse,
    StatusUpdate,
    SubmissionCounts,
    SubmissionCreate,
    SubmissionFilters,
    SubmissionListResponse,
    SubmissionRead,
    SubmissionSearchResponse,
    SubmissionStats,
    SubmissionStatusListResponse,
)
from src.keylight.schemas.user import (
    EmailCheck,
    UserCreate,
    UserProjectRead,
    UserRead,
    UserSubmissionRead,
)

__all__ = [
    # Envelopes
    "DataResponse",
    "MessageResponse",
    "Page",
    "PageResponse",
    "Pagination",
    # Project
    "ProjectCreate",
    "ProjectRead",
    # Submission
    "RecentSubmissionsResponse",
    "StatusUpdate",
    "SubmissionCounts",
    "SubmissionCreate",
    "SubmissionFilters",
    "SubmissionListResponse",
    "SubmissionRead",
    "SubmissionSearchResponse",
    "SubmissionStats",
    "SubmissionStatusListResponse",
    # User
    "EmailCheck",
    "UserCreate",
    "UserProjectRead",
    "UserRead",
    "UserSubmissionRead",
]
