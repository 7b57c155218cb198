from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, model_validator

TokenAlgorithm = Literal["HS256", "HS384", "HS512"]


class HashingSettings(BaseModel):
    """Argon2id work factor. memory_cost is in KiB."""

    model_config = ConfigDict(frozen=True)

    time_cost: int = Field(default=3, ge=1)
    memory_cost: int = Field(default=65536, ge=8)
    parallelism: int = Field(default=4, ge=1)
    hash_len: int = Field(default=32, ge=16)
    salt_len: int = Field(default=16, ge=8)

    @model_validator(mode="after")
    def _memory_covers_lanes(self) -> "HashingSettings":
        # argon2 needs at least 8 KiB per lane
        if self.memory_cost < 8 * self.parallelism:
            raise ValueError("memory_cost must be at least 8 * parallelism KiB")
        return self


class TokenSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Empty means unset; issuing then fails with SigningFailure.
    signing_key: SecretStr = SecretStr("")
    algorithm: TokenAlgorithm = "HS256"
    ttl_minutes: int = Field(default=60 * 24, gt=0)


class AuthSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    hashing: HashingSettings = Field(default_factory=HashingSettings)
    tokens: TokenSettings = Field(default_factory=TokenSettings)
