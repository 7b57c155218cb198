"""
Account directory port.

The directory owns account storage. It must enforce email uniqueness
atomically; the service relies on ``create`` raising ``DuplicateKey``
rather than checking beforehand.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from authcore.domain.entities import Account


class AccountDirectoryPort(Protocol):
    def create(self, account: Account) -> None:
        """Store a new account. Raises DuplicateKey if the email is taken."""
        ...

    def fetch_by_email(self, email: str) -> Account:
        """Raises NotFound if no account has this email."""
        ...

    def fetch_by_id(self, account_id: UUID) -> Account:
        """Raises NotFound if no account has this id."""
        ...

    def delete(self, account_id: UUID) -> None:
        """Raises NotFound if no account has this id."""
        ...

    def list_all(self) -> list[Account]:
        ...

    def update_password_hash(self, account_id: UUID, password_hash: str) -> None:
        """Replace the stored hash. Raises NotFound if no account has this id."""
        ...


class DirectoryError(Exception):
    """Base class for directory errors. Adapters wrap driver errors in this."""


class DuplicateKey(DirectoryError):
    """Raised when creating an account whose email already exists."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already exists: {email}")


class NotFound(DirectoryError):
    """Raised when a lookup key matches no account."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Account not found: {key}")
