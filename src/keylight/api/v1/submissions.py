"""Submission endpoints - public intake plus admin review."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.keylight.api.dependencies import SubmissionServiceDep
from src.keylight.core.exceptions import ValidationError
from src.keylight.schemas import (
    DataResponse,
    MessageResponse,
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

router = APIRouter(prefix="/submissions", tags=["submissions"])

PageParam = Annotated[int, Query(description="1-based page number")]
PageSizeParam = Annotated[int, Query(alias="pageSize", description="Items per page, max 100")]


@router.post(
    "",
    response_model=MessageResponse[SubmissionRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create submission",
    description="Public intake form endpoint. Every violated rule is reported at once.",
    responses={
        201: {"description": "Submission created"},
        400: {"description": "Validation failed"},
        409: {"description": "A submission with this email already exists"},
    },
)
async def create_submission(
    payload: SubmissionCreate,
    service: SubmissionServiceDep,
) -> MessageResponse[SubmissionRead]:
    submission = await service.create_submission(payload.model_dump(exclude_unset=True))
    return MessageResponse[SubmissionRead](
        message="Submission created successfully",
        data=SubmissionRead.model_validate(submission),
    )


@router.get(
    "",
    response_model=SubmissionListResponse,
    summary="List submissions",
    description="Filtered, newest-first page of submissions with summary stats.",
)
async def list_submissions(
    service: SubmissionServiceDep,
    status: str | None = None,
    buyer_category: str | None = None,
    build_budget: str | None = None,
    construction_timeline: str | None = None,
    page: PageParam = 1,
    page_size: PageSizeParam = 20,
) -> SubmissionListResponse:
    filters = SubmissionFilters(
        status=status,
        buyer_category=buyer_category,
        build_budget=build_budget,
        construction_timeline=construction_timeline,
    )
    result, stats = await service.list_submissions(filters.conditions(), page, page_size)
    return SubmissionListResponse(
        data=[SubmissionRead.model_validate(row) for row in result.data],
        pagination=result.pagination,
        stats=SubmissionCounts.model_validate(stats),
        filters=filters.conditions(),
    )


@router.get(
    "/stats",
    response_model=DataResponse[SubmissionStats],
    response_model_exclude_none=True,
    summary="Submission statistics",
)
async def get_stats(service: SubmissionServiceDep) -> DataResponse[SubmissionStats]:
    stats = await service.get_stats()
    return DataResponse[SubmissionStats](data=SubmissionStats.model_validate(stats))


@router.get(
    "/search",
    response_model=SubmissionSearchResponse,
    summary="Search submissions",
    description="Case-insensitive match on name, email, company and project description.",
)
async def search_submissions(
    service: SubmissionServiceDep,
    q: Annotated[str | None, Query(description="Search term, at least 2 characters")] = None,
    page: PageParam = 1,
    page_size: PageSizeParam = 20,
) -> SubmissionSearchResponse:
    if not q:
        raise ValidationError("Search term (q) is required")
    result, term = await service.search_submissions(q, page, page_size)
    return SubmissionSearchResponse(
        data=[SubmissionRead.model_validate(row) for row in result.data],
        pagination=result.pagination,
        search_term=term,
    )


@router.get(
    "/recent",
    response_model=RecentSubmissionsResponse,
    summary="Recent submissions",
)
async def recent_submissions(
    service: SubmissionServiceDep,
    days: Annotated[int, Query(description="Look-back window in days")] = 7,
    limit: Annotated[int, Query(description="Maximum submissions to return")] = 10,
) -> RecentSubmissionsResponse:
    rows = await service.get_recent_submissions(days, limit)
    return RecentSubmissionsResponse(
        data=[SubmissionRead.model_validate(row) for row in rows],
        count=len(rows),
        days=days,
    )


@router.get(
    "/status/{submission_status}",
    response_model=SubmissionStatusListResponse,
    summary="List submissions by status",
)
async def list_by_status(
    submission_status: str,
    service: SubmissionServiceDep,
    page: PageParam = 1,
    page_size: PageSizeParam = 20,
) -> SubmissionStatusListResponse:
    result, stats = await service.get_submissions_by_status(submission_status, page, page_size)
    return SubmissionStatusListResponse(
        data=[SubmissionRead.model_validate(row) for row in result.data],
        pagination=result.pagination,
        stats=SubmissionCounts.model_validate(stats),
        status=submission_status,
    )


@router.get(
    "/{submission_id}",
    response_model=DataResponse[SubmissionRead],
    summary="Get submission",
    responses={404: {"description": "Submission not found"}},
)
async def get_submission(
    submission_id: str,
    service: SubmissionServiceDep,
) -> DataResponse[SubmissionRead]:
    submission = await service.get_submission(submission_id)
    return DataResponse[SubmissionRead](data=SubmissionRead.model_validate(submission))


@router.put(
    "/{submission_id}/status",
    response_model=MessageResponse[SubmissionRead],
    summary="Update submission status",
    description="Set the review status. Omitting admin_notes keeps the existing notes.",
    responses={
        400: {"description": "Missing or unknown status"},
        404: {"description": "Submission not found"},
    },
)
async def update_status(
    submission_id: str,
    payload: StatusUpdate,
    service: SubmissionServiceDep,
) -> MessageResponse[SubmissionRead]:
    submission = await service.update_submission_status(
        submission_id, payload.status, payload.admin_notes
    )
    return MessageResponse[SubmissionRead](
        message=f"Submission status updated to {payload.status}",
        data=SubmissionRead.model_validate(submission),
    )


@router.delete(
    "/{submission_id}",
    response_model=MessageResponse[SubmissionRead],
    summary="Delete submission",
    responses={404: {"description": "Submission not found"}},
)
async def delete_submission(
    submission_id: str,
    service: SubmissionServiceDep,
) -> MessageResponse[SubmissionRead]:
    submission = await service.delete_submission(submission_id)
    return MessageResponse[SubmissionRead](
        message="Submission deleted successfully",
        data=SubmissionRead.model_validate(submission),
    )
