"""
Argon2id credential hasher.

Hashes are stored in the PHC string format
($argon2id$v=19$m=...,t=...,p=...$salt$hash), so the salt and work factor
travel with each hash and verification needs nothing else.
"""

import logging

from argon2 import PasswordHasher, Type
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from authcore.config.models import HashingSettings
from authcore.domain.errors import HashingFailure

logger = logging.getLogger(__name__)


class Argon2Hasher:
    def __init__(self, settings: HashingSettings) -> None:
        self.ph = PasswordHasher(
            time_cost=settings.time_cost,
            memory_cost=settings.memory_cost,
            parallelism=settings.parallelism,
            hash_len=settings.hash_len,
            salt_len=settings.salt_len,
            type=Type.ID,
        )

    def hash(self, plaintext: str) -> str:
        try:
            secret = plaintext.encode("utf-8")
            return str(self.ph.hash(secret))
        except (UnicodeEncodeError, HashingError) as exc:
            logger.error("Password hashing failed: %s", type(exc).__name__)
            raise HashingFailure() from exc

    def verify(self, plaintext: str, password_hash: str) -> bool:
        try:
            secret = plaintext.encode("utf-8")
        except UnicodeEncodeError:
            # Nothing that cannot be encoded was ever hashed.
            return False

        try:
            return bool(self.ph.verify(password_hash, secret))
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as exc:
            # Anything other than a mismatch means the hash could not be decoded.
            logger.error("Stored hash could not be decoded: %s", type(exc).__name__)
            raise HashingFailure() from exc

    def needs_rehash(self, password_hash: str) -> bool:
        try:
            return bool(self.ph.check_needs_rehash(password_hash))
        except InvalidHashError as exc:
            raise HashingFailure() from exc
