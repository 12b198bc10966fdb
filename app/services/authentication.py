"""Login workflow: look up the user, verify the salted hash, issue a signed token."""

import logging
from typing import Any

from app.schemas.auth import AuthResponse, SaltedHash, TokenClaim, TokenConfig, parse_auth_request
from app.services.interfaces import HashingService, TokenService, UserStore
from app.services.results import ErrorKind, LoginResult, WorkflowError, malformed_request

logger = logging.getLogger(__name__)

# Same message for unknown user and wrong password so usernames cannot be probed.
INVALID_CREDENTIALS_MESSAGE = "Incorrect username or password"

USER_ID_CLAIM = "userId"
USERNAME_CLAIM = "username"


def _invalid_credentials() -> WorkflowError:
    return WorkflowError(kind=ErrorKind.CREDENTIALS, message=INVALID_CREDENTIALS_MESSAGE)


def authenticate_user(
    payload: Any,
    store: UserStore,
    hashing: HashingService,
    tokens: TokenService,
    config: TokenConfig,
) -> LoginResult:
    """Exchange a login request body for an AuthResponse carrying userId and username claims."""
    request = parse_auth_request(payload)
    if request is None:
        return malformed_request()

    user = store.get_user_by_username(request.username)
    if user is None:
        # Spend the same hashing work as a real check so timing does not reveal the miss.
        hashing.verify(request.password, hashing.decoy_hash())
        logger.info("Login rejected: unknown username")
        return _invalid_credentials()

    is_valid_password = hashing.verify(
        request.password, SaltedHash(hash=user.password, salt=user.salt)
    )
    if not is_valid_password:
        logger.info("Login rejected: bad password", extra={"user_id": user.id})
        return _invalid_credentials()

    token = tokens.generate(
        config,
        TokenClaim(name=USER_ID_CLAIM, value=str(user.id)),
        TokenClaim(name=USERNAME_CLAIM, value=user.username),
    )
    logger.info("Login succeeded", extra={"user_id": user.id})
    return AuthResponse(token=token)
