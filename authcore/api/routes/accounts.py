from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from authcore.api.deps import get_auth_service, get_current_claims
from authcore.api.errors import to_http_exception
from authcore.api.schemas import AccountResponse, AccountSummaryResponse
from authcore.domain.entities import TokenClaims
from authcore.domain.errors import AuthError
from authcore.services.auth import AuthService

router = APIRouter()


@router.get("", response_model=list[AccountResponse])
def list_accounts(
    _claims: TokenClaims = Depends(get_current_claims),
    service: AuthService = Depends(get_auth_service),
) -> list[AccountResponse]:
    try:
        views = service.list_accounts()
    except AuthError as exc:
        raise to_http_exception(exc) from exc

    return [AccountResponse(**view.model_dump()) for view in views]


@router.get("/{account_id}", response_model=AccountSummaryResponse)
def get_account_summary(
    account_id: UUID,
    _claims: TokenClaims = Depends(get_current_claims),
    service: AuthService = Depends(get_auth_service),
) -> AccountSummaryResponse:
    try:
        summary = service.get_account_summary(account_id)
    except AuthError as exc:
        raise to_http_exception(exc) from exc

    return AccountSummaryResponse(name=summary.name)


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: UUID,
    _claims: TokenClaims = Depends(get_current_claims),
    service: AuthService = Depends(get_auth_service),
) -> Response:
    try:
        service.delete_account(account_id)
    except AuthError as exc:
        raise to_http_exception(exc) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)
