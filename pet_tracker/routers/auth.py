"""
Authentication router — register and login endpoints.

These are the only public (unauthenticated) endpoints in the API.
Everything else requires a valid JWT token.

Endpoints:
  POST /register  — Create a new account (role USER)
  POST /login     — Authenticate with username or email and get a token

Security audit notes:
  - Plaintext passwords exist only in memory during request processing;
    they are hashed before any database operation and never logged.
  - JWT tokens appear only in response bodies, which are not logged.
"""

from fastapi import APIRouter, Depends, status

from pet_tracker.dependencies import get_user_service
from pet_tracker.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserAuthResponse,
)
from pet_tracker.schemas.user import UserResponse
from pet_tracker.services.user_service import RegistrationData, UserService

router = APIRouter()


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: RegisterRequest,
    service: UserService = Depends(get_user_service),
):
    """
    Register a new account.

    - **username**: Unique, case-insensitive
    - **email**: Unique, case-insensitive, must look like an address
    - **password**: Must satisfy the password policy (see error message)
    - **firstname** / **lastname**: Optional, but not blank if given
    """
    return await service.register(
        RegistrationData(
            email=request.email,
            username=request.username,
            password=request.password,
            first_name=request.firstname,
            last_name=request.lastname,
        )
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Authenticate and get a token",
)
async def login(
    request: LoginRequest,
    service: UserService = Depends(get_user_service),
):
    """
    Authenticate with a username (or email) and password.

    Returns a JWT bearer token that must be included in the Authorization
    header for all subsequent requests:

        Authorization: Bearer <token>
    """
    result = await service.login(request.username, request.password)
    return TokenResponse(
        token=result.token,
        user=UserAuthResponse.model_validate(result.user),
    )
