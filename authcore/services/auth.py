"""
AuthService - registration, login and account pass-throughs.

Login failure causes (unknown email, wrong password, unreadable stored
hash) all surface as one InvalidCredentials with no chained cause or
context. An
unknown email still pays for one hash verification so response time does
not reveal whether the account exists.
"""

import logging
import secrets
import weakref
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID, uuid4

from authcore.domain.entities import Account, AccountSummary, AccountView, TokenClaims
from authcore.domain.errors import (
    AccountNotFound,
    DuplicateAccount,
    HashingFailure,
    InvalidCredentials,
    PersistenceFailure,
    ValidationFailure,
)
from authcore.domain.validation import validate_registration
from authcore.ports.auth import HasherPort, TokenIssuerPort
from authcore.ports.directory import AccountDirectoryPort, DirectoryError, DuplicateKey, NotFound

logger = logging.getLogger(__name__)

# Keyed by hasher so the dummy hash lives as long as the hasher does,
# not as long as one (possibly per-request) service.
_dummy_hashes: "weakref.WeakKeyDictionary[HasherPort, str]" = weakref.WeakKeyDictionary()


class AuthService:
    def __init__(
        self,
        directory: AccountDirectoryPort,
        hasher: HasherPort,
        issuer: TokenIssuerPort,
    ) -> None:
        self.directory = directory
        self.hasher = hasher
        self.issuer = issuer

    @property
    def _dummy_hash(self) -> str:
        dummy = _dummy_hashes.get(self.hasher)
        if dummy is None:
            dummy = self.hasher.hash(secrets.token_urlsafe(16))
            _dummy_hashes[self.hasher] = dummy
        return dummy

    def register(
        self,
        name: str,
        email: str,
        password: str,
        phone: str = "",
        address: str = "",
        role: str = "",
        is_admin: bool = False,
    ) -> UUID:
        """
        Create an account and return its id.

        ``is_admin`` is accepted so request payloads can be passed through
        unchanged, but it is ignored: self-registered accounts are never
        administrators.
        """
        errors = validate_registration(name, email, password)
        if errors:
            raise ValidationFailure(errors)

        if is_admin:
            logger.warning("Ignoring is_admin on self-registration for %s", email)

        account = Account(
            id=uuid4(),
            name=name,
            email=email,
            password_hash=self.hasher.hash(password),
            phone=phone,
            address=address,
            role=role,
            is_admin=False,
        )

        try:
            self.directory.create(account)
        except DuplicateKey as exc:
            logger.info("Registration rejected: email already registered")
            raise DuplicateAccount() from exc
        except DirectoryError as exc:
            logger.exception("Directory create failed for account %s", account.id)
            raise PersistenceFailure() from exc

        logger.info("Registered account %s", account.id)
        return account.id

    def login(self, email: str, password: str) -> str:
        """Check credentials and return a signed session token."""
        account: Account | None
        try:
            account = self.directory.fetch_by_email(email)
        except NotFound:
            account = None
        except DirectoryError as exc:
            logger.exception("Directory lookup failed during login")
            raise PersistenceFailure() from exc

        # Raised outside the except blocks so no cause or context is attached.
        if account is None:
            self._verify_against_dummy(password)
            logger.warning("Login rejected: unknown email")
            raise InvalidCredentials()

        try:
            matched = self.hasher.verify(password, account.password_hash)
        except HashingFailure:
            logger.exception("Stored hash for account %s is unreadable", account.id)
            matched = False

        if not matched:
            logger.warning("Login rejected for account %s: password mismatch", account.id)
            raise InvalidCredentials()

        self._refresh_hash(account, password)

        token = self.issuer.issue(account.id, account.is_admin, account.role)
        logger.info("Login succeeded for account %s", account.id)
        return token

    def authenticate(self, token: str) -> TokenClaims:
        """Verify a session token. Raises InvalidToken or ExpiredToken."""
        return self.issuer.verify(token)

    def delete_account(self, account_id: UUID) -> None:
        with self._directory_call("delete"):
            self.directory.delete(account_id)
        logger.info("Deleted account %s", account_id)

    def list_accounts(self) -> list[AccountView]:
        with self._directory_call("list"):
            accounts = self.directory.list_all()
        return [account.to_view() for account in accounts]

    def get_account_summary(self, account_id: UUID) -> AccountSummary:
        with self._directory_call("fetch"):
            account = self.directory.fetch_by_id(account_id)
        return account.to_summary()

    def _verify_against_dummy(self, password: str) -> None:
        try:
            self.hasher.verify(password, self._dummy_hash)
        except HashingFailure:
            logger.exception("Dummy verification failed")

    def _refresh_hash(self, account: Account, password: str) -> None:
        """Re-hash with the current work factor if the stored hash is outdated."""
        try:
            if not self.hasher.needs_rehash(account.password_hash):
                return
            self.directory.update_password_hash(account.id, self.hasher.hash(password))
        except (HashingFailure, DirectoryError):
            logger.warning("Could not upgrade hash for account %s", account.id, exc_info=True)
            return
        logger.info("Upgraded password hash for account %s", account.id)

    @contextmanager
    def _directory_call(self, action: str) -> Iterator[None]:
        try:
            yield
        except NotFound as exc:
            raise AccountNotFound() from exc
        except DirectoryError as exc:
            logger.exception("Directory %s failed", action)
            raise PersistenceFailure() from exc
