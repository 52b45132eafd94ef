"""
User Repository — the persistence boundary for User records.

UserStore is the capability set the service layer depends on; any backend
that provides these six coroutines can stand in for the database (the
test suite uses the SQLAlchemy implementation over in-memory SQLite).

No business rules live here. The one thing the repository does interpret
is a unique-constraint violation on save: it is translated into the same
DuplicateUsernameError / DuplicateEmailError the service raises from its
pre-checks, because the constraint is what actually guards against two
concurrent registrations racing past those checks.
"""

import uuid
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pet_tracker.exceptions import DuplicateEmailError, DuplicateUsernameError
from pet_tracker.models.user import User, normalize_identifier


class UserStore(Protocol):
    async def find_by_id(self, user_id: uuid.UUID) -> User | None: ...

    async def find_by_username(self, username: str) -> User | None: ...

    async def find_by_email(self, email: str) -> User | None: ...

    async def find_all(self) -> list[User]: ...

    async def save(self, user: User) -> User: ...

    async def delete_by_id(self, user_id: uuid.UUID) -> None: ...


class UserRepository:
    """SQLAlchemy-backed UserStore bound to one request-scoped session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, user_id: uuid.UUID) -> User | None:
        return await self.db.get(User, user_id)

    async def find_by_username(self, username: str) -> User | None:
        """Case-insensitive username lookup."""
        result = await self.db.execute(
            select(User).where(User.username_normalized == normalize_identifier(username))
        )
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> User | None:
        """Case-insensitive email lookup."""
        result = await self.db.execute(
            select(User).where(User.email_normalized == normalize_identifier(email))
        )
        return result.scalar_one_or_none()

    async def find_all(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())

    async def save(self, user: User) -> User:
        """
        Insert or update a user.

        Flushing assigns the primary key on first insert, so the returned
        instance always has an id.

        Raises:
            DuplicateUsernameError / DuplicateEmailError: If the write
                violates a uniqueness constraint.
        """
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError as exc:
            message = str(exc.orig).lower()
            if "username" in message:
                raise DuplicateUsernameError(user.username) from exc
            if "email" in message:
                raise DuplicateEmailError(user.email) from exc
            raise
        return user

    async def delete_by_id(self, user_id: uuid.UUID) -> None:
        """Remove the record. Does nothing if it is already gone."""
        user = await self.db.get(User, user_id)
        if user is None:
            return
        await self.db.delete(user)
        await self.db.flush()
