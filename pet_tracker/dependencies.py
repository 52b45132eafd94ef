"""
FastAPI dependencies for authentication and service wiring.

Dependencies are reusable functions that FastAPI injects into route
handlers. The chain for an authenticated user endpoint is:

  get_db (session)
      └── get_user_service (session -> UserService)
              └── get_current_user (bearer token -> User)

Only authentication happens here. Role and ownership checks belong to
UserService, because most rules depend on the target account as well as
the caller (e.g. "owner or admin"), and the service can only see the
target after loading it.

Every protected endpoint declares get_current_user as a parameter. If the
token is missing, expired or tampered with, or its account is gone,
disabled or locked, the request is rejected with 401 before the route
handler runs.
"""

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pet_tracker.config import settings
from pet_tracker.database import get_db
from pet_tracker.exceptions import InvalidTokenError
from pet_tracker.models.user import User
from pet_tracker.repositories.user_repository import UserRepository
from pet_tracker.security import token_issuer
from pet_tracker.services.user_service import UserService


# OAuth2PasswordBearer tells FastAPI where to look for the token:
# the "Authorization: Bearer <token>" header. auto_error=False lets us
# return our own 401 body instead of FastAPI's default.
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/login",
    auto_error=False,
)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """Build a UserService bound to the request's session and the process-wide token issuer."""
    return UserService(UserRepository(db), token_issuer)


async def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    service: UserService = Depends(get_user_service),
) -> User:
    """
    Validate the bearer token and return the corresponding User.

    Raises:
        InvalidTokenError (401): If no token was sent.
        TokenExpiredError / InvalidTokenError (401): If the token does not
            verify or its account may no longer log in.
    """
    if token is None:
        raise InvalidTokenError("Not authenticated")
    return await service.authenticate_token(token)
