from typing import Protocol
from uuid import UUID

from authcore.domain.entities import TokenClaims


class HasherPort(Protocol):
    def hash(self, plaintext: str) -> str:
        """One-way, salted hash. Raises HashingFailure."""
        ...

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """False on mismatch. Raises HashingFailure only for a malformed hash."""
        ...

    def needs_rehash(self, password_hash: str) -> bool:
        """True if the hash was made with parameters other than the current ones."""
        ...


class TokenIssuerPort(Protocol):
    def issue(self, account_id: UUID, is_admin: bool, role: str) -> str:
        """Raises SigningFailure."""
        ...

    def verify(self, token: str) -> TokenClaims:
        """Raises InvalidToken or ExpiredToken."""
        ...
