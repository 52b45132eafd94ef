"""
Pydantic schemas for User-related requests and responses.

These schemas control what user data is exposed through the API.
Notice that hashed_password is NEVER included in any response schema —
this is the redaction boundary for every user endpoint.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from pet_tracker.models.user import Role


class UserResponse(BaseModel):
    """Redacted representation of a User (never includes password material)."""
    id: uuid.UUID
    email: str
    username: str
    first_name: str | None
    last_name: str | None
    role: Role
    enabled: bool
    locked: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class UserUpdateRequest(BaseModel):
    """Request body for PATCH /users/{id}. Omitted or null fields are left unchanged."""
    firstname: str | None = Field(None, max_length=100)
    lastname: str | None = Field(None, max_length=100)
