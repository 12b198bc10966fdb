"""Collaborator contracts consumed by the auth workflows (store, hashing, tokens)."""

from typing import Any, Protocol

from app.models.user import User
from app.schemas.auth import SaltedHash, TokenClaim, TokenConfig


class UserStore(Protocol):
    def get_user_by_username(self, username: str) -> User | None: ...

    def insert_user(self, user: User) -> bool:
        """Insert user; False when the store did not acknowledge it (e.g. duplicate username)."""
        ...


class HashingService(Protocol):
    def generate_salted_hash(self, value: str) -> SaltedHash: ...

    def verify(self, value: str, salted_hash: SaltedHash) -> bool: ...

    def decoy_hash(self) -> SaltedHash:
        """A SaltedHash no password matches, costing as much to verify as a real one."""
        ...


class TokenService(Protocol):
    def generate(self, config: TokenConfig, *claims: TokenClaim) -> str: ...

    def decode(self, config: TokenConfig, token: str) -> dict[str, Any]:
        """Return validated claims. Raises jwt.PyJWTError on invalid or expired token."""
        ...
