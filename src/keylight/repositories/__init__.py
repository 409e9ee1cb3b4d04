"""Repository exports."""

from src.keylight.repositories.base import BaseRepository, Row, coerce_id
from src.keylight.repositories.project import ProjectRepository
from src.keylight.repositories.submission import SubmissionRepository
from src.keylight.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "Row",
    "SubmissionRepository",
    "UserRepository",
    "coerce_id",
]
