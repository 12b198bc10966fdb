"""Password hashing and JWT creation/verification for authentication."""

import hmac
import secrets
from datetime import UTC, datetime
from typing import Any

import bcrypt
import jwt

from app.schemas.auth import SaltedHash, TokenClaim, TokenConfig

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


class BcryptHashingService:
    """HashingService backed by bcrypt. The salt is kept next to the hash, not only inside it."""

    def __init__(self, rounds: int) -> None:
        self.rounds = rounds
        self._decoy: SaltedHash | None = None

    def generate_salted_hash(self, value: str) -> SaltedHash:
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(_password_bytes(value), salt)
        return SaltedHash(hash=hashed.decode("utf-8"), salt=salt.decode("utf-8"))

    def decoy_hash(self) -> SaltedHash:
        """Hash of a random value at this service's cost, generated once per instance."""
        if self._decoy is None:
            self._decoy = self.generate_salted_hash(secrets.token_urlsafe(16))
        return self._decoy

    def verify(self, value: str, salted_hash: SaltedHash) -> bool:
        """Recompute the hash with the stored salt and compare in constant time."""
        try:
            candidate = bcrypt.hashpw(
                _password_bytes(value), salted_hash.salt.encode("utf-8")
            )
        except (ValueError, TypeError):
            return False
        return hmac.compare_digest(candidate, salted_hash.hash.encode("utf-8"))


def _password_bytes(value: str) -> bytes:
    # bcrypt has a 72-byte limit; newer releases raise instead of truncating.
    return value.encode("utf-8")[:BCRYPT_MAX_BYTES]


class JwtTokenService:
    """TokenService issuing HMAC-signed JWTs carrying string claims plus iss/aud/exp/iat."""

    def __init__(self, algorithm: str = "HS256") -> None:
        self.algorithm = algorithm

    def generate(self, config: TokenConfig, *claims: TokenClaim) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "iss": config.issuer,
            "aud": config.audience,
            "iat": now,
            "exp": now + config.expires_in,
        }
        for claim in claims:
            payload[claim.name] = claim.value
        return jwt.encode(
            payload,
            config.secret.get_secret_value(),
            algorithm=self.algorithm,
        )

    def decode(self, config: TokenConfig, token: str) -> dict[str, Any]:
        """
        Decode and validate JWT signature, expiry, audience and issuer.
        Raises jwt.PyJWTError on invalid or expired token.
        """
        return jwt.decode(
            token,
            config.secret.get_secret_value(),
            algorithms=[self.algorithm],
            audience=config.audience,
            issuer=config.issuer,
        )
