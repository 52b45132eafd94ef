"""
User model — the authentication identity.

Each User is a registered account: a username and email (both unique,
compared case-insensitively), an Argon2id password hash, an optional
first/last name, and exactly one role.

Roles:
  - ADMIN: Full access — may list, ban, delete and edit any account
  - MODERATOR: May list and view any account and ban/unban accounts
  - USER: The default role for registration — may only act on itself

Account flags:
  - enabled: cleared when a moderator/admin bans the account; disabled
    accounts cannot log in and their existing tokens stop working
  - locked: reserved for lockout; no endpoint toggles it, but login and
    token authentication both refuse locked accounts

Uniqueness is enforced by the database, not only by the service layer.
Every username and email is stored twice: as entered, and case-folded
in a UNIQUE column (username_normalized, email_normalized). Lookups
match on the folded column, so "Alice" and "alice" collide, and so do
"Émile" and "émile".
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from pet_tracker.database import Base


class Role(str, enum.Enum):
    """
    Defines the role a user holds within the tracker.

    Inherits from str so the enum value serializes naturally to JSON
    and can be stored as a simple string in the database.
    """
    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


def normalize_identifier(value: str) -> str:
    """Case-fold a username or email for comparison (full Unicode, not just ASCII)."""
    return value.casefold()


class User(Base):
    __tablename__ = "users"

    # Primary key: UUID provides globally unique IDs without sequential guessing
    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )

    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )

    # Case-folded copies, kept in sync by _normalize() below
    email_normalized: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )

    username_normalized: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )

    # Argon2id hash of the password (never store plaintext!)
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    first_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    last_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    role: Mapped[Role] = mapped_column(
        Enum(Role),
        default=Role.USER,
        nullable=False,
    )

    enabled: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    locked: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # --- Relationships ---
    # Pets survive their owner's deletion; the FK is set to NULL (see Pet.owner_id)
    pets: Mapped[list["Pet"]] = relationship(
        back_populates="owner",
        passive_deletes=True,
    )

    @validates("username", "email")
    def _normalize(self, key: str, value: str) -> str:
        setattr(self, f"{key}_normalized", normalize_identifier(value))
        return value

    # --- Role helpers ---

    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def is_moderator(self) -> bool:
        return self.role == Role.MODERATOR

    def is_staff(self) -> bool:
        """True for the roles allowed to oversee other accounts."""
        return self.role in (Role.ADMIN, Role.MODERATOR)

    def is_same_user(self, other: "User") -> bool:
        return self.id == other.id

