"""
Pets router — read-only pet endpoints for authenticated users.

Endpoints:
  GET /pets            — List all pets
  GET /pets/{pet_id}   — Get one pet
  GET /pet-types       — List pet types (soft-deleted types hidden)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pet_tracker.database import get_db
from pet_tracker.dependencies import get_current_user
from pet_tracker.models.user import User
from pet_tracker.schemas.pet import PetResponse, PetTypeResponse
from pet_tracker.services import pet_service

router = APIRouter()


@router.get("/pets", response_model=list[PetResponse], summary="List pets")
async def list_pets(
    caller: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await pet_service.get_pets(db)


@router.get("/pets/{pet_id}", response_model=PetResponse, summary="Get a pet")
async def get_pet(
    pet_id: int,
    caller: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await pet_service.get_pet(db, pet_id)


@router.get("/pet-types", response_model=list[PetTypeResponse], summary="List pet types")
async def list_pet_types(
    caller: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await pet_service.get_pet_types(db)
