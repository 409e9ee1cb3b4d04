"""Project endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.keylight.api.dependencies import ProjectRepo
from src.keylight.core.exceptions import NotFoundError, ValidationError
from src.keylight.repositories import coerce_id
from src.keylight.schemas import (
    DataResponse,
    MessageResponse,
    PageResponse,
    ProjectCreate,
    ProjectRead,
)
from src.keylight.schemas.pagination import clamp_page, clamp_page_size

router = APIRouter(prefix="/projects", tags=["projects"])


def _project_id(value: str) -> int:
    key = coerce_id(value)
    if key is None:
        raise ValidationError("Invalid project ID")
    return key


@router.post(
    "",
    response_model=MessageResponse[ProjectRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={400: {"description": "Invalid payload or unknown user_id"}},
)
async def create_project(payload: ProjectCreate, repo: ProjectRepo) -> MessageResponse[ProjectRead]:
    # Unset status falls through to the column default
    project = await repo.create(payload.model_dump(mode="json", exclude_none=True))
    return MessageResponse[ProjectRead](
        message="Project created successfully",
        data=ProjectRead.model_validate(project),
    )


@router.get(
    "",
    response_model=PageResponse[ProjectRead],
    summary="List projects",
)
async def list_projects(
    repo: ProjectRepo,
    page: int = 1,
    page_size: Annotated[int, Query(alias="pageSize")] = 20,
) -> PageResponse[ProjectRead]:
    result = await repo.paginate(clamp_page(page), clamp_page_size(page_size))
    return PageResponse[ProjectRead](
        data=[ProjectRead.model_validate(p) for p in result.data],
        pagination=result.pagination,
    )


@router.get(
    "/{project_id}",
    response_model=DataResponse[ProjectRead],
    summary="Get project",
    responses={404: {"description": "Project not found"}},
)
async def get_project(project_id: str, repo: ProjectRepo) -> DataResponse[ProjectRead]:
    project = await repo.find_by_id(_project_id(project_id))
    if project is None:
        raise NotFoundError(f"Project {project_id} not found")
    return DataResponse[ProjectRead](data=ProjectRead.model_validate(project))


@router.delete(
    "/{project_id}",
    response_model=MessageResponse[ProjectRead],
    summary="Delete project",
    description="Submissions linked to the project are kept and unlinked.",
    responses={404: {"description": "Project not found"}},
)
async def delete_project(project_id: str, repo: ProjectRepo) -> MessageResponse[ProjectRead]:
    project = await repo.delete_by_id(_project_id(project_id))
    if project is None:
        raise NotFoundError(f"Project {project_id} not found")
    return MessageResponse[ProjectRead](
        message="Project deleted successfully",
        data=ProjectRead.model_validate(project),
    )
