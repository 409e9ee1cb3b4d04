"""User model - account records that own projects and submissions."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from src.keylight.models.base import utc_now


class User(SQLModel, table=True):
    """User account. Email addresses are unique and stored lower-cased."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    full_name: str = Field(max_length=255)
    email_address: str = Field(max_length=255, unique=True, index=True)
    phone_number: str | None = Field(default=None, max_length=20)
    company_name: str | None = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())
