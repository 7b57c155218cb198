from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

# --- Accounts ---


class Account(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    email: str
    password_hash: str = Field(repr=False)
    phone: str = ""
    address: str = ""
    role: str = ""
    is_admin: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_view(self) -> "AccountView":
        return AccountView(
            id=self.id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            address=self.address,
            role=self.role,
            is_admin=self.is_admin,
        )

    def to_summary(self) -> "AccountSummary":
        return AccountSummary(name=self.name)


class AccountView(BaseModel):
    """Listing projection of an account. Never carries the password hash."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    email: str
    phone: str
    address: str
    role: str
    is_admin: bool


class AccountSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


# --- Tokens ---


class TokenClaims(BaseModel):
    """Decoded contents of a verified session token."""

    model_config = ConfigDict(frozen=True)

    account_id: UUID
    is_admin: bool
    role: str
    issued_at: datetime
    expires_at: datetime
