"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.keylight.api.dependencies.db import Executor
from src.keylight.repositories import ProjectRepository, SubmissionRepository, UserRepository


def get_submission_repository(executor: Executor) -> SubmissionRepository:
    return SubmissionRepository(executor)


def get_user_repository(executor: Executor) -> UserRepository:
    return UserRepository(executor)


def get_project_repository(executor: Executor) -> ProjectRepository:
    return ProjectRepository(executor)


SubmissionRepo = Annotated[SubmissionRepository, Depends(get_submission_repository)]
UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
