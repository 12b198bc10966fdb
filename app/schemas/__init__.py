"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthRequest,
    AuthResponse,
    ErrorResponse,
    InfoResponse,
    SaltedHash,
    TokenClaim,
    TokenConfig,
)
from app.schemas.health import HealthResponse

__all__ = [
    "AuthRequest",
    "AuthResponse",
    "ErrorResponse",
    "HealthResponse",
    "InfoResponse",
    "SaltedHash",
    "TokenClaim",
    "TokenConfig",
]
