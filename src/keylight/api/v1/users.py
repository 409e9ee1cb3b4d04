"""User endpoints - accounts and their related projects and submissions."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Query, status

from src.keylight.api.dependencies import UserServiceDep
from src.keylight.schemas import (
    DataResponse,
    EmailCheck,
    MessageResponse,
    UserCreate,
    UserProjectRead,
    UserRead,
    UserSubmissionRead,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=MessageResponse[UserRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    responses={
        400: {"description": "Invalid email address"},
        409: {"description": "A user with this email already exists"},
    },
)
async def create_user(payload: UserCreate, service: UserServiceDep) -> MessageResponse[UserRead]:
    user = await service.create_user(payload.model_dump(exclude_none=True))
    return MessageResponse[UserRead](
        message="User created successfully",
        data=UserRead.model_validate(user),
    )


@router.get(
    "",
    response_model=DataResponse[list[UserRead]],
    summary="List users",
    description="Offset-paged users. Unknown sort fields fall back to created_at.",
)
async def list_users(
    service: UserServiceDep,
    limit: int = 50,
    offset: int = 0,
    sort_by: Annotated[str, Query(alias="sortBy")] = "created_at",
    sort_order: Annotated[str, Query(alias="sortOrder")] = "DESC",
    created_after: Annotated[datetime | None, Query(alias="createdAfter")] = None,
    created_before: Annotated[datetime | None, Query(alias="createdBefore")] = None,
) -> DataResponse[list[UserRead]]:
    users = await service.list_users(
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        sort_order=sort_order,
        created_after=created_after,
        created_before=created_before,
    )
    return DataResponse[list[UserRead]](data=[UserRead.model_validate(u) for u in users])


@router.get(
    "/search",
    response_model=DataResponse[list[UserRead]],
    summary="Search users",
    description="Partial, case-insensitive match. With neither criterion the result is empty.",
)
async def search_users(
    service: UserServiceDep,
    email: str | None = None,
    name: str | None = None,
) -> DataResponse[list[UserRead]]:
    users = await service.search_users(email=email, name=name)
    return DataResponse[list[UserRead]](data=[UserRead.model_validate(u) for u in users])


@router.get(
    "/email-check",
    response_model=DataResponse[EmailCheck],
    summary="Check an email address",
)
async def check_email(
    service: UserServiceDep,
    email: str | None = None,
) -> DataResponse[EmailCheck]:
    result = await service.check_email(email)
    return DataResponse[EmailCheck](data=EmailCheck.model_validate(result))


@router.get(
    "/{user_id}",
    response_model=DataResponse[UserRead],
    summary="Get user",
    responses={404: {"description": "User not found"}},
)
async def get_user(user_id: str, service: UserServiceDep) -> DataResponse[UserRead]:
    user = await service.get_user(user_id)
    return DataResponse[UserRead](data=UserRead.model_validate(user))


@router.get(
    "/{user_id}/projects",
    response_model=DataResponse[list[UserProjectRead]],
    summary="List a user's projects",
)
async def get_user_projects(
    user_id: str,
    service: UserServiceDep,
) -> DataResponse[list[UserProjectRead]]:
    projects = await service.get_user_projects(user_id)
    return DataResponse[list[UserProjectRead]](
        data=[UserProjectRead.model_validate(p) for p in projects]
    )


@router.get(
    "/{user_id}/submissions",
    response_model=DataResponse[list[UserSubmissionRead]],
    summary="List a user's submissions",
)
async def get_user_submissions(
    user_id: str,
    service: UserServiceDep,
) -> DataResponse[list[UserSubmissionRead]]:
    submissions = await service.get_user_submissions(user_id)
    return DataResponse[list[UserSubmissionRead]](
        data=[UserSubmissionRead.model_validate(s) for s in submissions]
    )


@router.delete(
    "/{user_id}",
    response_model=MessageResponse[UserRead],
    summary="Delete user",
    description="Deletes the user and their projects. Their submissions are kept, unlinked.",
    responses={404: {"description": "User not found"}},
)
async def delete_user(user_id: str, service: UserServiceDep) -> MessageResponse[UserRead]:
    user = await service.delete_user(user_id)
    return MessageResponse[UserRead](
        message="User deleted successfully",
        data=UserRead.model_validate(user),
    )
