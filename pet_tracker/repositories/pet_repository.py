"""
Pet Repository — read access to pets and pet types, plus bulk insert for seeding.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pet_tracker.models.pet import Pet
from pet_tracker.models.pet_type import PetType


class PetRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> list[Pet]:
        result = await self.db.execute(select(Pet).order_by(Pet.id))
        return list(result.scalars().all())

    async def find_by_id(self, pet_id: int) -> Pet | None:
        return await self.db.get(Pet, pet_id)

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Pet.id)))
        return result.scalar_one()

    async def find_active_pet_types(self) -> list[PetType]:
        """Pet types that have not been soft-deleted."""
        result = await self.db.execute(
            select(PetType).where(PetType.deleted.is_(False)).order_by(PetType.name)
        )
        return list(result.scalars().all())

    async def find_pet_type_by_name(self, name: str) -> PetType | None:
        result = await self.db.execute(select(PetType).where(PetType.name == name))
        return result.scalar_one_or_none()

    async def save_all(self, items: list[Pet | PetType]) -> None:
        self.db.add_all(items)
        await self.db.flush()
