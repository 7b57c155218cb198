"""
Session tokens as HMAC-signed JWTs.

Claims:
  • sub       account id (UUID string)
  • is_admin  administrator flag
  • role      free-form role string
  • iat/exp   issue and expiry times (unix seconds)

Only the configured algorithm is accepted on decode. Expiry is checked
against the injected clock rather than the wall clock so that a fixed
clock decides validity in tests.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from jose import jwt
from jose.exceptions import JOSEError

from authcore.config.models import TokenSettings
from authcore.domain.entities import TokenClaims
from authcore.domain.errors import ExpiredToken, InvalidToken, SigningFailure
from authcore.ports.clock import ClockPort

logger = logging.getLogger(__name__)


class JWTTokenIssuer:
    def __init__(self, settings: TokenSettings, clock: ClockPort) -> None:
        self._key = settings.signing_key.get_secret_value()
        self._algorithm = settings.algorithm
        self._ttl = timedelta(minutes=settings.ttl_minutes)
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, account_id: UUID, is_admin: bool, role: str) -> str:
        if not self._key:
            logger.error("Cannot issue token: signing key is not configured")
            raise SigningFailure()

        # Claims carry whole seconds; truncate once so exp - iat is exactly the ttl.
        issued_at = int(self._clock.now_utc().timestamp())
        claims = {
            "sub": str(account_id),
            "is_admin": is_admin,
            "role": role,
            "iat": issued_at,
            "exp": issued_at + int(self._ttl.total_seconds()),
        }
        try:
            token: str = jwt.encode(claims, self._key, algorithm=self._algorithm)
        except JOSEError as exc:
            logger.error("Token signing failed: %s", type(exc).__name__)
            raise SigningFailure() from exc
        return token

    def verify(self, token: str) -> TokenClaims:
        if not self._key:
            raise InvalidToken()

        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._key,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "require_exp": True, "require_sub": True},
            )
        except JOSEError as exc:
            raise InvalidToken() from exc

        claims = self._parse_claims(payload)
        if claims.expires_at <= self._clock.now_utc():
            raise ExpiredToken()
        return claims

    def _parse_claims(self, payload: dict[str, Any]) -> TokenClaims:
        sub = payload.get("sub")
        is_admin = payload.get("is_admin")
        role = payload.get("role")
        iat = payload.get("iat")
        exp = payload.get("exp")

        if not isinstance(is_admin, bool) or not isinstance(role, str):
            raise InvalidToken()
        if not isinstance(exp, int) or not isinstance(iat, int):
            raise InvalidToken()

        try:
            account_id = UUID(str(sub))
        except ValueError as exc:
            raise InvalidToken() from exc

        try:
            issued_at = datetime.fromtimestamp(iat, UTC)
            expires_at = datetime.fromtimestamp(exp, UTC)
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidToken() from exc

        return TokenClaims(
            account_id=account_id,
            is_admin=is_admin,
            role=role,
            issued_at=issued_at,
            expires_at=expires_at,
        )
