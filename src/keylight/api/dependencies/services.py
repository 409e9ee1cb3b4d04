"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.keylight.api.dependencies.repositories import SubmissionRepo, UserRepo
from src.keylight.services.submission_service import SubmissionService
from src.keylight.services.user_service import UserService


def get_submission_service(submission_repo: SubmissionRepo) -> SubmissionService:
    return SubmissionService(submission_repo)


def get_user_service(user_repo: UserRepo) -> UserService:
    return UserService(user_repo)


SubmissionServiceDep = Annotated[SubmissionService, Depends(get_submission_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
