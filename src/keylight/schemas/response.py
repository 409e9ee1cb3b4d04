"""Success envelopes shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from src.keylight.schemas.pagination import Pagination

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class MessageResponse(DataResponse[T], Generic[T]):
    """Envelope for writes, carrying a human-readable outcome."""

    message: str


class PageResponse(BaseModel, Generic[T]):
    success: bool = True
    data: list[T]
    pagination: Pagination
