"""Context-free input validators."""

import re
from dataclasses import dataclass
from typing import Any

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


@dataclass(frozen=True, slots=True)
class EmailValidation:
    is_valid: bool
    error: str | None = None


def validate_email(email: Any) -> EmailValidation:
    """Check an email address and report why it was rejected.

    Never raises; the result carries the reason instead.
    """
    if email is None:
        return EmailValidation(False, "Invalid email format: email cannot be null or undefined")
    if not isinstance(email, str):
        return EmailValidation(False, "Invalid email format: email must be a string")

    email = email.strip()
    if not email:
        return EmailValidation(False, "Invalid email format: email cannot be empty")
    if ".." in email or email.startswith(".") or email.endswith("."):
        return EmailValidation(False, "Invalid email format: invalid dot placement")
    if not EMAIL_PATTERN.fullmatch(email):
        return EmailValidation(False, "Invalid email format: does not match required pattern")
    return EmailValidation(True)


def is_valid_email(email: Any) -> bool:
    return validate_email(email).is_valid
