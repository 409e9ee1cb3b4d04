"""Sanitization and validation rules for intake submissions.

Pure functions with no I/O; the service runs them before touching the store.
"""

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from src.keylight.core.exceptions import ValidationError
from src.keylight.models.enums import (
    BuildBudget,
    BuyerCategory,
    ConstructionTimeline,
    FinancingPlan,
    LandStatus,
    SubmissionStatus,
    enum_values,
)
from src.keylight.models.submission import DEFAULT_REFERRAL_SOURCE

REQUIRED_FIELDS = (
    "full_name",
    "email_address",
    "phone_number",
    "buyer_category",
    "financing_plan",
    "land_status",
    "build_budget",
    "construction_timeline",
    "project_description",
)

TRIMMED_FIELDS = (
    "full_name",
    "email_address",
    "phone_number",
    "company_name",
    "lot_address",
    "preferred_area_description",
    "project_description",
)

ENUM_FIELDS: dict[str, type[Enum]] = {
    "buyer_category": BuyerCategory,
    "financing_plan": FinancingPlan,
    "land_status": LandStatus,
    "build_budget": BuildBudget,
    "construction_timeline": ConstructionTimeline,
}

BOOLEAN_FIELDS = ("interested_in_preferred_lender", "needs_help_finding_land")

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"[\d\s\-().+]{10,}", re.ASCII)


def sanitize_submission(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a normalized copy of ``data``.

    Trims free-text fields, lower-cases the email, fills creation defaults and
    drops keys whose value is None. Applying it twice changes nothing.
    """
    sanitized = dict(data)

    for field in TRIMMED_FIELDS:
        value = sanitized.get(field)
        if isinstance(value, str):
            sanitized[field] = value.strip()

    email = sanitized.get("email_address")
    if isinstance(email, str):
        sanitized["email_address"] = email.lower()

    sanitized["status"] = sanitized.get("status") or SubmissionStatus.NEW.value
    sanitized["referral_source"] = sanitized.get("referral_source") or DEFAULT_REFERRAL_SOURCE
    for field in BOOLEAN_FIELDS:
        sanitized[field] = sanitized.get(field) or False

    return {key: value for key, value in sanitized.items() if value is not None}


def _is_blank(value: Any) -> bool:
    return not value or str(value).strip() == ""


def submission_errors(data: Mapping[str, Any]) -> list[str]:
    """List every rule ``data`` violates, in a stable order."""
    errors = [f"{field} is required" for field in REQUIRED_FIELDS if _is_blank(data.get(field))]

    email = data.get("email_address")
    if email and not EMAIL_PATTERN.fullmatch(str(email)):
        errors.append("email_address must be a valid email")

    phone = data.get("phone_number")
    if phone and not PHONE_PATTERN.fullmatch(str(phone)):
        errors.append("phone_number must be a valid phone number")

    for field, enum_cls in ENUM_FIELDS.items():
        value = data.get(field)
        allowed = enum_values(enum_cls)
        if value and value not in allowed:
            errors.append(f"{field} must be one of: {', '.join(allowed)}")

    land_status = data.get("land_status")
    if land_status == LandStatus.OWN_LAND.value and _is_blank(data.get("lot_address")):
        errors.append("lot_address is required when land_status is own_land")
    if (
        land_status == LandStatus.NEED_LAND.value
        and data.get("needs_help_finding_land") is True
        and _is_blank(data.get("preferred_area_description"))
    ):
        errors.append(
            "preferred_area_description is required when needs_help_finding_land is true"
        )

    return errors


def validate_submission(data: Mapping[str, Any]) -> None:
    """Raise ValidationError listing every violated rule, if any."""
    errors = submission_errors(data)
    if errors:
        raise ValidationError("Validation failed", details=errors)


def validate_status(status: Any) -> str:
    """Check ``status`` is a known submission status and return it."""
    allowed = enum_values(SubmissionStatus)
    if status not in allowed:
        message = f"Status must be one of: {', '.join(allowed)}"
        raise ValidationError(message, details=[message])
    return str(status)
