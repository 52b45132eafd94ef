"""
PetType model — the species catalog (dog, cat, rabbit, ...).

Pet types are soft-deleted: the row stays so existing pets keep their
reference, but deleted types are hidden from listings.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pet_tracker.database import Base


class PetType(Base):
    __tablename__ = "pet_types"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )

    deleted: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )

    pets: Mapped[list["Pet"]] = relationship(back_populates="pet_type")
