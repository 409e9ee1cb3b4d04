"""User management service."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from src.keylight.core.exceptions import (
    DuplicateError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from src.keylight.core.logging import get_logger
from src.keylight.core.validators import validate_email
from src.keylight.repositories import Row, UserRepository, coerce_id

logger = get_logger(__name__)

UNIQUE_VIOLATION = "23505"


class UserService:
    """User management service.

    Email uniqueness is checked up front and enforced again by the unique
    index, so concurrent creates cannot both succeed.
    """

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    @staticmethod
    def _user_id(id: Any) -> int:
        key = coerce_id(id)
        if key is None:
            raise ValidationError("Invalid user ID")
        return key

    async def create_user(self, data: Mapping[str, Any]) -> Row:
        """Create a user with a validated, lower-cased email.

        Raises:
            ValidationError: The email is malformed.
            DuplicateError: The email is already registered.
        """
        check = validate_email(data.get("email_address"))
        if not check.is_valid:
            raise ValidationError("Validation failed", details=[f"email_address: {check.error}"])

        fields = dict(data)
        fields["email_address"] = str(data["email_address"]).strip().lower()
        if isinstance(fields.get("full_name"), str):
            fields["full_name"] = fields["full_name"].strip()

        if await self.user_repo.email_exists(fields["email_address"]):
            raise DuplicateError("A user with this email already exists")

        try:
            user = await self.user_repo.create(fields)
        except StoreError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateError("A user with this email already exists") from e
            raise
        logger.info("User created", user_id=user["id"])
        return user

    async def get_user(self, id: Any) -> Row:
        user = await self.user_repo.find_by_id(self._user_id(id))
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def delete_user(self, id: Any) -> Row:
        """Delete a user. Their projects go with them; submissions are unlinked."""
        deleted = await self.user_repo.delete_by_id(self._user_id(id))
        if deleted is None:
            raise NotFoundError("User not found")
        logger.info("User deleted", user_id=deleted["id"])
        return deleted

    async def get_user_projects(self, id: Any) -> list[Row]:
        user = await self.get_user(id)
        return await self.user_repo.get_user_projects(user["id"])

    async def get_user_submissions(self, id: Any) -> list[Row]:
        user = await self.get_user(id)
        return await self.user_repo.get_user_submissions(user["id"])

    async def search_users(self, email: str | None = None, name: str | None = None) -> list[Row]:
        return await self.user_repo.search_users(email=email, name=name)

    async def list_users(
        self,
        limit: int = 50,
        offset: int = 0,
        sort_by: str = "created_at",
        sort_order: str = "DESC",
        created_after: datetime | None = None,
        created_before: datetime | None = None,
    ) -> list[Row]:
        return await self.user_repo.find_users_with_filters(
            limit=limit,
            offset=offset,
            sort_by=sort_by,
            sort_order=sort_order,
            created_after=created_after,
            created_before=created_before,
        )

    async def check_email(self, email: str | None) -> dict[str, Any]:
        """Validation result plus whether the address is already registered."""
        check = validate_email(email)
        exists = await self.user_repo.email_exists(email) if check.is_valid else False
        return {
            "email": (email or "").strip().lower(),
            "is_valid": check.is_valid,
            "error": check.error,
            "exists": exists,
        }
