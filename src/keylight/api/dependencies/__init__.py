"""FastAPI dependency injection definitions."""

from src.keylight.api.dependencies.db import Executor, get_executor
from src.keylight.api.dependencies.repositories import (
    ProjectRepo,
    SubmissionRepo,
    UserRepo,
    get_project_repository,
    get_submission_repository,
    get_user_repository,
)
from src.keylight.api.dependencies.services import (
    SubmissionServiceDep,
    UserServiceDep,
    get_submission_service,
    get_user_service,
)

__all__ = [
    # Database
    "Executor",
    "get_executor",
    # Repositories
    "ProjectRepo",
    "SubmissionRepo",
    "UserRepo",
    "get_project_repository",
    "get_submission_repository",
    "get_user_repository",
    # Services
    "SubmissionServiceDep",
    "UserServiceDep",
    "get_submission_service",
    "get_user_service",
]
