"""Repository for projects."""

from src.keylight.models import Project
from src.keylight.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for the ``projects`` table. Owned projects are listed via UserRepository."""

    model = Project
