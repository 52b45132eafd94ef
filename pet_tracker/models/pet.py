"""
Pet model — an animal whose symptoms are tracked.

Relationship chain:
    User (owner, optional) --> Pet(s) <-- PetType

The owner link is nullable: pets can be seeded without an owner, and
deleting a user account detaches its pets (ON DELETE SET NULL) rather
than deleting them.
"""

import uuid
from datetime import date
from typing import Optional

from sqlalchemy import String, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pet_tracker.database import Base


class Pet(Base):
    __tablename__ = "pets"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    date_of_birth: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    is_alive: Mapped[bool] = mapped_column(
        default=True,
        nullable=False,
    )

    pet_type_id: Mapped[int] = mapped_column(
        ForeignKey("pet_types.id"),
        nullable=False,
    )

    owner_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # --- Relationships ---
    pet_type: Mapped["PetType"] = relationship(back_populates="pets")
    owner: Mapped[Optional["User"]] = relationship(back_populates="pets")
