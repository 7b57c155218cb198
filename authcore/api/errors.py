from typing import Any

from fastapi import HTTPException, status

from authcore.domain.errors import (
    AccountNotFound,
    AuthError,
    DuplicateAccount,
    ExpiredToken,
    InvalidCredentials,
    InvalidToken,
    ValidationFailure,
)

STATUS_BY_ERROR: dict[type[AuthError], int] = {
    ValidationFailure: 422,
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    InvalidToken: status.HTTP_401_UNAUTHORIZED,
    ExpiredToken: status.HTTP_401_UNAUTHORIZED,
    DuplicateAccount: status.HTTP_409_CONFLICT,
    AccountNotFound: status.HTTP_404_NOT_FOUND,
}


def to_http_exception(exc: AuthError) -> HTTPException:
    """Map an AuthError to an HTTPException exposing only its code and message."""
    status_code = STATUS_BY_ERROR.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)

    detail: dict[str, Any] = {"code": exc.code, "message": exc.message}
    if isinstance(exc, ValidationFailure):
        detail["errors"] = [
            {"field": e.field, "code": e.code, "message": e.message} for e in exc.errors
        ]

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return HTTPException(status_code=status_code, detail=detail, headers=headers)
