"""Tagged workflow results: a success payload or a classified WorkflowError."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from app.schemas.auth import AuthResponse


class ErrorKind(str, Enum):
    """Failure classes returned by the auth workflows."""

    MALFORMED_REQUEST = "malformed_request"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    CREDENTIALS = "credentials"


class WorkflowError(BaseModel):
    """Terminal, client-caused failure. message is what the caller gets to see."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str


class SignupSuccess(BaseModel):
    """Account created; carries nothing beyond the confirmation."""

    model_config = ConfigDict(frozen=True)


SignupResult = SignupSuccess | WorkflowError
LoginResult = AuthResponse | WorkflowError

MALFORMED_REQUEST_MESSAGE = "Request body must be a JSON object with string username and password"


def malformed_request() -> WorkflowError:
    return WorkflowError(kind=ErrorKind.MALFORMED_REQUEST, message=MALFORMED_REQUEST_MESSAGE)
