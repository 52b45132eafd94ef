"""
Custom exception classes and FastAPI exception handlers.

Why custom exceptions?
  The service layer raises domain-specific errors (like ForbiddenError)
  without importing HTTP concepts. The handler registered here translates
  them into HTTP responses with a consistent body:

      {"detail": "human readable message", "error_type": "forbidden"}

  Each exception class declares its own status code and error_type, so
  adding a new error kind never requires touching the handler.

Exception hierarchy:
    PetTrackerError (base)
    ├── DuplicateUsernameError   — registration with a taken username
    ├── DuplicateEmailError      — registration with a taken email
    ├── WeakPasswordError        — password fails the composition policy
    ├── InvalidEmailError        — email is not shaped like an address
    ├── BlankFieldError          — optional name supplied but whitespace-only
    ├── InvalidCredentialsError  — unknown account or wrong password
    ├── AccountDisabledError     — account was banned by a moderator/admin
    ├── AccountLockedError       — account is locked out
    ├── NotFoundError            — referenced account/pet does not exist
    ├── ForbiddenError           — caller lacks the role or ownership
    ├── BadActionError           — enable/disable action missing or unknown
    ├── TokenExpiredError        — bearer token is past its expiry
    └── InvalidTokenError        — bearer token is malformed or tampered
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class PetTrackerError(Exception):
    """Base exception for all Pet Symptom Tracker domain errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    error_type: str = "bad_request"

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Registration errors
# ---------------------------------------------------------------------------

class DuplicateUsernameError(PetTrackerError):
    """Raised when the username is already taken (case-insensitive)."""

    status_code = status.HTTP_409_CONFLICT
    error_type = "duplicate_username"

    def __init__(self, username: str):
        self.username = username
        super().__init__("Username already exists.")


class DuplicateEmailError(PetTrackerError):
    """Raised when attempting to register with an email that's already in use."""

    status_code = status.HTTP_409_CONFLICT
    error_type = "duplicate_email"

    def __init__(self, email: str):
        self.email = email
        super().__init__("User with this email has already been registered")


class WeakPasswordError(PetTrackerError):
    """Raised when a password fails the composition policy.

    The message is the policy description itself, so the client can show
    the user exactly what is required.
    """

    error_type = "weak_password"


class InvalidEmailError(PetTrackerError):
    error_type = "invalid_email"

    def __init__(self, detail: str = "Invalid email"):
        super().__init__(detail)


class BlankFieldError(PetTrackerError):
    """Raised when an optional field was supplied but contains only whitespace."""

    error_type = "blank_field"

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} may be omitted, but can not be blank")


# ---------------------------------------------------------------------------
# Authentication errors
# ---------------------------------------------------------------------------

class InvalidCredentialsError(PetTrackerError):
    """Raised when login credentials are incorrect.

    Used for both "no such account" and "wrong password" so the response
    does not reveal which usernames exist.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "invalid_credentials"

    def __init__(self):
        super().__init__("Invalid username/email or password")


class AccountDisabledError(PetTrackerError):
    status_code = status.HTTP_403_FORBIDDEN
    error_type = "account_disabled"

    def __init__(self):
        super().__init__("Account is disabled")


class AccountLockedError(PetTrackerError):
    status_code = status.HTTP_403_FORBIDDEN
    error_type = "account_locked"

    def __init__(self):
        super().__init__("Account is locked")


class TokenExpiredError(PetTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "token_expired"

    def __init__(self):
        super().__init__("Token has expired")


class InvalidTokenError(PetTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "invalid_token"

    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(detail)


# ---------------------------------------------------------------------------
# Authorization and lookup errors
# ---------------------------------------------------------------------------

class NotFoundError(PetTrackerError):
    """Raised when a referenced resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(detail)


class ForbiddenError(PetTrackerError):
    """Raised when the caller lacks the role or ownership for an action."""

    status_code = status.HTTP_403_FORBIDDEN
    error_type = "forbidden"

    def __init__(self, detail: str = "You are not allowed to do this"):
        super().__init__(detail)


class BadActionError(PetTrackerError):
    error_type = "bad_action"


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the domain exception handler with the FastAPI application.

    Every PetTrackerError subclass is rendered as:
        {"detail": exc.detail, "error_type": exc.error_type}
    with the status code declared on the class.

    This is called once during app startup in main.py.
    """

    @app.exception_handler(PetTrackerError)
    async def pet_tracker_error_handler(
        request: Request, exc: PetTrackerError
    ) -> JSONResponse:
        logger.debug(
            f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_type}"
        )
        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "error_type": exc.error_type},
            headers=headers,
        )
