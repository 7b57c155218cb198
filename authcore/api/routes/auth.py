from fastapi import APIRouter, Depends, status

from authcore.api.deps import get_auth_service, get_current_claims
from authcore.api.errors import to_http_exception
from authcore.api.schemas import (
    ClaimsResponse,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    Token,
)
from authcore.domain.entities import TokenClaims
from authcore.domain.errors import AuthError
from authcore.services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """Register a new account. No token is issued; log in afterwards."""
    try:
        account_id = service.register(
            name=req.name,
            email=req.email,
            password=req.password,
            phone=req.phone,
            address=req.address,
            role=req.role,
            is_admin=req.is_admin,
        )
    except AuthError as exc:
        raise to_http_exception(exc) from exc

    return RegisterResponse(id=account_id)


@router.post("/login", response_model=Token)
def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> Token:
    """Authenticate and return a bearer token."""
    try:
        access_token = service.login(req.email, req.password)
    except AuthError as exc:
        raise to_http_exception(exc) from exc

    return Token(access_token=access_token)


@router.get("/me", response_model=ClaimsResponse)
def read_claims(claims: TokenClaims = Depends(get_current_claims)) -> ClaimsResponse:
    """Decoded claims of the presented token."""
    return ClaimsResponse(**claims.model_dump())
