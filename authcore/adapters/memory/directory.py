"""In-memory account directory adapter.

This adapter implements AccountDirectoryPort for tests and single-process
deployments. Email uniqueness is enforced under a lock, so concurrent
registrations for the same email resolve to exactly one account.
"""

import threading
from uuid import UUID

from authcore.domain.entities import Account
from authcore.ports.directory import DuplicateKey, NotFound


class InMemoryAccountDirectory:
    def __init__(self) -> None:
        self._accounts: dict[UUID, Account] = {}
        self._ids_by_email: dict[str, UUID] = {}
        self._lock = threading.Lock()

    def create(self, account: Account) -> None:
        with self._lock:
            if account.email in self._ids_by_email:
                raise DuplicateKey(account.email)
            self._accounts[account.id] = account.model_copy()
            self._ids_by_email[account.email] = account.id

    def fetch_by_email(self, email: str) -> Account:
        with self._lock:
            account_id = self._ids_by_email.get(email)
            if account_id is None:
                raise NotFound(email)
            return self._accounts[account_id].model_copy()

    def fetch_by_id(self, account_id: UUID) -> Account:
        with self._lock:
            account = self._accounts.get(account_id)
            if account is None:
                raise NotFound(str(account_id))
            return account.model_copy()

    def delete(self, account_id: UUID) -> None:
        with self._lock:
            account = self._accounts.pop(account_id, None)
            if account is None:
                raise NotFound(str(account_id))
            del self._ids_by_email[account.email]

    def list_all(self) -> list[Account]:
        with self._lock:
            accounts = sorted(self._accounts.values(), key=lambda a: a.email)
            return [a.model_copy() for a in accounts]

    def update_password_hash(self, account_id: UUID, password_hash: str) -> None:
        with self._lock:
            account = self._accounts.get(account_id)
            if account is None:
                raise NotFound(str(account_id))
            self._accounts[account_id] = account.model_copy(
                update={"password_hash": password_hash}
            )

    def clear(self) -> None:
        """Clear all accounts - useful for testing."""
        with self._lock:
            self._accounts.clear()
            self._ids_by_email.clear()
