"""Signup, login and bearer-token endpoints plus the dependencies that wire their collaborators."""

import json
from functools import lru_cache
from typing import Annotated, Any

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings, get_token_config
from app.core.database import get_db
from app.core.security import BcryptHashingService, JwtTokenService
from app.schemas.auth import AuthResponse, ErrorResponse, InfoResponse, TokenConfig
from app.services.authentication import USER_ID_CLAIM, USERNAME_CLAIM, authenticate_user
from app.services.interfaces import HashingService, TokenService, UserStore
from app.services.introspection import describe_session
from app.services.registration import register_user
from app.services.results import ErrorKind, WorkflowError
from app.services.user_store import SqlAlchemyUserStore

router = APIRouter()
security = HTTPBearer(auto_error=False)

# Credential failures share 409 with validation/conflict errors (see DESIGN.md).
ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.MALFORMED_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION: status.HTTP_409_CONFLICT,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.CREDENTIALS: status.HTTP_409_CONFLICT,
}


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return SqlAlchemyUserStore(db)


@lru_cache
def get_hashing_service() -> HashingService:
    return BcryptHashingService(rounds=get_settings().BCRYPT_ROUNDS)


def get_token_service() -> TokenService:
    return JwtTokenService(algorithm=get_settings().JWT_ALGORITHM)


def error_response(error: WorkflowError) -> JSONResponse:
    """Map a classified workflow failure to its status code and ErrorResponse body."""
    return JSONResponse(
        status_code=ERROR_STATUS[error.kind],
        content=ErrorResponse(message=error.message).model_dump(),
    )


async def read_json_body(request: Request) -> Any:
    """Decoded JSON body, or None when the body is missing or not JSON."""
    raw = await request.body()
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


@router.post(
    "/signup",
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def signup(
    payload: Annotated[Any, Depends(read_json_body)],
    store: Annotated[UserStore, Depends(get_user_store)],
    hashing: Annotated[HashingService, Depends(get_hashing_service)],
) -> Response:
    """Register a new account with role 'user'. Empty 200 on success."""
    result = register_user(payload, store, hashing)
    if isinstance(result, WorkflowError):
        return error_response(result)
    return Response(status_code=status.HTTP_200_OK)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def login(
    payload: Annotated[Any, Depends(read_json_body)],
    store: Annotated[UserStore, Depends(get_user_store)],
    hashing: Annotated[HashingService, Depends(get_hashing_service)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    config: Annotated[TokenConfig, Depends(get_token_config)],
) -> AuthResponse | JSONResponse:
    """
    Authenticate with username and password; returns a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = authenticate_user(payload, store, hashing, tokens, config)
    if isinstance(result, WorkflowError):
        return error_response(result)
    return result


def get_token_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    config: Annotated[TokenConfig, Depends(get_token_config)],
) -> dict[str, Any]:
    """Dependency: require a valid Bearer JWT and return its claims. Raises 401 if missing or invalid."""
    challenge = {"WWW-Authenticate": f'Bearer realm="{get_settings().JWT_REALM}"'}
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers=challenge,
        )
    try:
        claims = tokens.decode(config, credentials.credentials)
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers=challenge,
        )
    if not claims.get(USER_ID_CLAIM) or not claims.get(USERNAME_CLAIM):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers=challenge,
        )
    return claims


@router.get("/authenticate")
def check_authenticated(
    _claims: Annotated[dict[str, Any], Depends(get_token_claims)],
) -> Response:
    """Confirm the bearer token is accepted. Empty 200."""
    return Response(status_code=status.HTTP_200_OK)


@router.get("/info", response_model=InfoResponse)
def get_user_info(
    claims: Annotated[dict[str, Any], Depends(get_token_claims)],
) -> InfoResponse:
    """Return id and username of the token bearer."""
    return InfoResponse(message=describe_session(claims))
