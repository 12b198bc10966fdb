"""Identity summary for a token that has already been validated upstream."""

from collections.abc import Mapping
from typing import Any

from app.services.authentication import USER_ID_CLAIM, USERNAME_CLAIM


def describe_session(claims: Mapping[str, Any]) -> str:
    return f"id: {claims.get(USER_ID_CLAIM)}\nusername: {claims.get(USERNAME_CLAIM)}"
