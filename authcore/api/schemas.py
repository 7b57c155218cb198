from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: str = Field(..., max_length=128)
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=1024)
    phone: str = ""
    address: str = ""
    role: str = ""
    # Accepted for compatibility with older clients; the service ignores it.
    is_admin: bool = False


class RegisterResponse(BaseModel):
    id: UUID


class LoginRequest(BaseModel):
    email: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ClaimsResponse(BaseModel):
    account_id: UUID
    is_admin: bool
    role: str
    issued_at: datetime
    expires_at: datetime


class AccountResponse(BaseModel):
    id: UUID
    name: str
    email: str
    phone: str
    address: str
    role: str
    is_admin: bool


class AccountSummaryResponse(BaseModel):
    name: str
