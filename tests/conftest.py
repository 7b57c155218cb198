from datetime import UTC, datetime

import pytest
from pydantic import SecretStr

from authcore.adapters.auth.hasher import Argon2Hasher
from authcore.adapters.auth.tokens import JWTTokenIssuer
from authcore.adapters.clock import FixedClock
from authcore.adapters.memory.directory import InMemoryAccountDirectory
from authcore.adapters.sqlite.directory import SQLiteAccountDirectory
from authcore.adapters.sqlite.migrator import SQLiteMigrator
from authcore.config.models import AuthSettings, HashingSettings, TokenSettings
from authcore.services.auth import AuthService

TEST_SIGNING_KEY = "test-signing-key-do-not-use-in-prod"


@pytest.fixture
def hashing_settings() -> HashingSettings:
    # Lowest work factor argon2 accepts; keeps the suite fast.
    return HashingSettings(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def signing_key() -> str:
    return TEST_SIGNING_KEY


@pytest.fixture
def token_settings(signing_key) -> TokenSettings:
    return TokenSettings(signing_key=SecretStr(signing_key), ttl_minutes=60)


@pytest.fixture
def auth_settings(hashing_settings, token_settings) -> AuthSettings:
    return AuthSettings(hashing=hashing_settings, tokens=token_settings)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 1, 12, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def hasher(hashing_settings) -> Argon2Hasher:
    return Argon2Hasher(hashing_settings)


@pytest.fixture
def issuer(token_settings, clock) -> JWTTokenIssuer:
    return JWTTokenIssuer(token_settings, clock)


@pytest.fixture
def directory() -> InMemoryAccountDirectory:
    return InMemoryAccountDirectory()


@pytest.fixture
def service(directory, hasher, issuer) -> AuthService:
    return AuthService(directory=directory, hasher=hasher, issuer=issuer)


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "authcore.db")


@pytest.fixture
def sqlite_directory(db_path) -> SQLiteAccountDirectory:
    SQLiteMigrator(db_path).run_migrations()
    return SQLiteAccountDirectory(db_path)
