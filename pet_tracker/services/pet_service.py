"""
Pet service — read-only access to pets and the pet type catalog.

Pets are visible to any authenticated caller; managing them is outside
this API for now.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from pet_tracker.exceptions import NotFoundError
from pet_tracker.models.pet import Pet
from pet_tracker.models.pet_type import PetType
from pet_tracker.repositories.pet_repository import PetRepository


async def get_pets(db: AsyncSession) -> list[Pet]:
    return await PetRepository(db).find_all()


async def get_pet(db: AsyncSession, pet_id: int) -> Pet:
    """
    Fetch a single pet.

    Raises:
        NotFoundError: If no pet has this id.
    """
    pet = await PetRepository(db).find_by_id(pet_id)
    if pet is None:
        raise NotFoundError(f"Pet {pet_id} not found")
    return pet


async def get_pet_types(db: AsyncSession) -> list[PetType]:
    """List pet types, hiding soft-deleted ones."""
    return await PetRepository(db).find_active_pet_types()
