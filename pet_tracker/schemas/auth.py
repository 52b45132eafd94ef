"""
Pydantic schemas for authentication endpoints (register and login).

Email and password are accepted as plain strings on purpose: their format
rules (password strength, email shape) are checked by the service so that
the error reported for a bad registration follows a fixed order, and
comes back as a 400 with a descriptive message rather than a 422.
"""

import uuid

from pydantic import BaseModel, Field

from pet_tracker.models.user import Role


class RegisterRequest(BaseModel):
    """Request body for POST /register."""
    email: str = Field(max_length=255)
    username: str = Field(min_length=1, max_length=100)
    password: str
    firstname: str | None = Field(None, max_length=100)
    lastname: str | None = Field(None, max_length=100)


class LoginRequest(BaseModel):
    """Request body for POST /login. `username` may also be an email address."""
    username: str = Field(min_length=1)
    password: str


class UserAuthResponse(BaseModel):
    """The public profile returned alongside a login token."""
    id: uuid.UUID
    username: str
    role: Role

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    """Response body for successful login — the JWT plus the public profile."""
    token: str
    token_type: str = "bearer"
    user: UserAuthResponse
