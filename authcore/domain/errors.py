"""
Error taxonomy for the authentication core.

Every error carries a stable ``code`` and a fixed message that is safe to
show to callers. Underlying storage or crypto errors are chained as
``__cause__`` for logging and never appear in ``str(error)``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single input validation problem."""

    field: str
    code: str
    message: str


class AuthError(Exception):
    """Base class for all authentication errors."""

    code = "auth_error"
    message = "Authentication error"

    def __init__(self) -> None:
        super().__init__(self.message)


class ValidationFailure(AuthError):
    """Malformed input. Caller's fault, never retried."""

    code = "validation_failed"
    message = "Invalid input"

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        super().__init__()


class InvalidCredentials(AuthError):
    """Unknown email or wrong password. Deliberately uninformative."""

    code = "invalid_credentials"
    message = "Email or password is invalid"


class DuplicateAccount(AuthError):
    code = "duplicate_account"
    message = "An account with this email already exists"


class AccountNotFound(AuthError):
    code = "account_not_found"
    message = "Account not found"


class HashingFailure(AuthError):
    code = "hashing_failed"
    message = "Credential processing failed"


class SigningFailure(AuthError):
    code = "signing_failed"
    message = "Token could not be issued"


class InvalidToken(AuthError):
    code = "invalid_token"
    message = "Token is invalid"


class ExpiredToken(AuthError):
    code = "expired_token"
    message = "Token has expired"


class PersistenceFailure(AuthError):
    code = "persistence_failed"
    message = "Account storage is unavailable"
