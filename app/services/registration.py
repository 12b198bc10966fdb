"""Signup workflow: username bounds, uniqueness, password policy, salted hash, insert."""

import logging
from typing import Any

from app.models.user import User, UserRole
from app.schemas.auth import parse_auth_request
from app.services.interfaces import HashingService, UserStore
from app.services.password_policy import evaluate_password
from app.services.results import (
    ErrorKind,
    SignupResult,
    SignupSuccess,
    WorkflowError,
    malformed_request,
)

logger = logging.getLogger(__name__)

USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 24

USERNAME_TAKEN_MESSAGE = "The username is already taken"
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


def register_user(
    payload: Any,
    store: UserStore,
    hashing: HashingService,
    role: UserRole = UserRole.USER,
    data: str = "",
) -> SignupResult:
    """
    Create an account from a signup request body.

    Checks run in order and stop at the first failure; uniqueness is checked before
    password strength. The store is written exactly once, and only on success.
    """
    request = parse_auth_request(payload)
    if request is None:
        return malformed_request()

    if len(request.username) < USERNAME_MIN_LEN:
        return WorkflowError(
            kind=ErrorKind.VALIDATION,
            message=f"The username cannot be less than {USERNAME_MIN_LEN} characters",
        )
    if len(request.username) > USERNAME_MAX_LEN:
        return WorkflowError(
            kind=ErrorKind.VALIDATION,
            message=f"The username cannot be more than {USERNAME_MAX_LEN} characters",
        )

    if store.get_user_by_username(request.username) is not None:
        return WorkflowError(kind=ErrorKind.CONFLICT, message=USERNAME_TAKEN_MESSAGE)

    is_strong, message = evaluate_password(request.password)
    if not is_strong:
        return WorkflowError(kind=ErrorKind.VALIDATION, message=message)

    salted_hash = hashing.generate_salted_hash(request.password)
    user = User(
        username=request.username,
        password=salted_hash.hash,
        salt=salted_hash.salt,
        role=role.value,
        data=data,
    )

    # The advisory check above can race; the store's unique constraint decides.
    if not store.insert_user(user):
        logger.warning(
            "Signup insert not acknowledged", extra={"username": request.username}
        )
        return WorkflowError(kind=ErrorKind.CONFLICT, message=UNKNOWN_ERROR_MESSAGE)

    logger.info(
        "User registered", extra={"username": request.username, "role": role.value}
    )
    return SignupSuccess()
