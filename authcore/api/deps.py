import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from authcore.adapters.auth.hasher import Argon2Hasher
from authcore.adapters.auth.tokens import JWTTokenIssuer
from authcore.adapters.clock import SystemClock
from authcore.adapters.sqlite.directory import SQLiteAccountDirectory
from authcore.api.errors import to_http_exception
from authcore.config.loader import load_settings
from authcore.config.models import AuthSettings
from authcore.domain.entities import TokenClaims
from authcore.domain.errors import AuthError
from authcore.services.auth import AuthService


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.config_path = Path(os.environ.get("AUTHCORE_CONFIG", self.base_dir / "auth.yaml"))
        self.data_dir = Path(os.environ.get("AUTHCORE_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "authcore.db")


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_auth_settings(settings: Settings = Depends(get_settings)) -> AuthSettings:
    return load_settings(settings.config_path)


# --- Adapters ---
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


def get_directory(settings: Settings = Depends(get_settings)) -> SQLiteAccountDirectory:
    return SQLiteAccountDirectory(settings.db_path)


@lru_cache
def get_hasher(auth_settings: AuthSettings = Depends(get_auth_settings)) -> Argon2Hasher:
    return Argon2Hasher(auth_settings.hashing)


def get_token_issuer(
    auth_settings: AuthSettings = Depends(get_auth_settings),
    clock: SystemClock = Depends(get_clock),
) -> JWTTokenIssuer:
    return JWTTokenIssuer(auth_settings.tokens, clock)


# --- Services ---
def get_auth_service(
    directory: SQLiteAccountDirectory = Depends(get_directory),
    hasher: Argon2Hasher = Depends(get_hasher),
    issuer: JWTTokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(directory=directory, hasher=hasher, issuer=issuer)


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_claims(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    service: AuthService = Depends(get_auth_service),
) -> TokenClaims:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return service.authenticate(token)
    except AuthError as exc:
        raise to_http_exception(exc) from exc
