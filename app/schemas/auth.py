"""Request/response schemas and value objects for the auth workflows."""

from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator


class AuthRequest(BaseModel):
    """Credentials for signup and login. The password is plaintext and never persisted."""

    model_config = ConfigDict(strict=True)

    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password")

    @field_validator("username", "password")
    @classmethod
    def validate_utf8(cls, v: str) -> str:
        # JSON can carry lone surrogates; they cannot be stored or hashed.
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("must be encodable as UTF-8")
        return v


class AuthResponse(BaseModel):
    """Signed token returned after a successful login."""

    token: str = Field(..., description="JWT bearer token")


class ErrorResponse(BaseModel):
    """Body of every rejected auth request."""

    message: str


class InfoResponse(BaseModel):
    """Identity summary for the bearer of a valid token."""

    message: str


class SaltedHash(BaseModel):
    """Password hash and the salt it was computed with; both are needed to verify."""

    model_config = ConfigDict(frozen=True)

    hash: str
    salt: str


class TokenClaim(BaseModel):
    """Name/value pair embedded into an issued token."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class TokenConfig(BaseModel):
    """Process-wide token settings; built once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    issuer: str
    audience: str
    expires_in: timedelta
    secret: SecretStr


def parse_auth_request(payload: Any) -> AuthRequest | None:
    """Parse a decoded request body; None when it is not a valid AuthRequest."""
    if isinstance(payload, AuthRequest):
        return payload
    try:
        return AuthRequest.model_validate(payload)
    except ValidationError:
        return None
