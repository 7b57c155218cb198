"""
Registration input validation.

Pure functions returning a list of FieldError; an empty list means valid.
"""

from __future__ import annotations

import re

from .errors import FieldError

# local@domain.tld, no whitespace, exactly one "@"
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MAX_NAME_LENGTH = 128
MAX_EMAIL_LENGTH = 255


def is_email_shaped(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def validate_registration(name: str, email: str, password: str) -> list[FieldError]:
    errors: list[FieldError] = []

    if not name or not name.strip():
        errors.append(FieldError(field="name", code="name_required", message="Name is required"))
    elif len(name) > MAX_NAME_LENGTH:
        errors.append(
            FieldError(
                field="name",
                code="name_too_long",
                message=f"Name must be {MAX_NAME_LENGTH} characters or less",
            )
        )

    if not email or not email.strip():
        errors.append(
            FieldError(field="email", code="email_required", message="Email is required")
        )
    elif len(email) > MAX_EMAIL_LENGTH or not is_email_shaped(email):
        errors.append(
            FieldError(field="email", code="email_invalid", message="Email is not valid")
        )

    if not password:
        errors.append(
            FieldError(field="password", code="password_required", message="Password is required")
        )

    return errors
