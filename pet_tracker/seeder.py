"""
Startup seeding — demo accounts and pets for local development.

!! NOT FOR PRODUCTION !!
Runs from the application lifespan when SEED_ON_STARTUP is true. Every
seeded account shares the SEED_PASSWORD setting.

Seeded accounts:
    ┌────────────┬──────────────────────────┬───────────┐
    │ Username   │ Email                    │ Role      │
    ├────────────┼──────────────────────────┼───────────┤
    │ admin      │ admin@pettracker.dev     │ ADMIN     │
    │ moderator  │ moderator@pettracker.dev │ MODERATOR │
    │ user       │ user@pettracker.dev      │ USER      │
    └────────────┴──────────────────────────┴───────────┘

Seeding is idempotent: pets are only inserted into an empty pets table,
and accounts whose username or email already exists are skipped. Accounts
go through the same UserStore as registration, so the uniqueness
constraints apply to them too.
"""

from datetime import date

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from pet_tracker.models.pet import Pet
from pet_tracker.models.pet_type import PetType
from pet_tracker.models.user import Role, User
from pet_tracker.repositories.pet_repository import PetRepository
from pet_tracker.repositories.user_repository import UserRepository
from pet_tracker.security import hash_password


SEED_USERS = [
    {
        "username": "admin",
        "email": "admin@pettracker.dev",
        "first_name": "Ada",
        "last_name": "Admin",
        "role": Role.ADMIN,
    },
    {
        "username": "moderator",
        "email": "moderator@pettracker.dev",
        "first_name": "Mo",
        "last_name": "Derator",
        "role": Role.MODERATOR,
    },
    {
        "username": "user",
        "email": "user@pettracker.dev",
        "first_name": None,
        "last_name": None,
        "role": Role.USER,
    },
]

SEED_PET_TYPES = ["Dog", "Cat", "Rabbit", "Bird"]

SEED_PETS = [
    {"name": "Bello", "pet_type": "Dog", "date_of_birth": date(2019, 4, 12), "is_alive": True},
    {"name": "Minoes", "pet_type": "Cat", "date_of_birth": date(2021, 9, 3), "is_alive": True},
    {"name": "Snuffie", "pet_type": "Rabbit", "date_of_birth": date(2016, 1, 20), "is_alive": False},
]


async def seed_pets(db: AsyncSession) -> int:
    """Insert pet types and pets if there are no pets yet. Returns pets inserted."""
    repo = PetRepository(db)
    if await repo.count() > 0:
        return 0

    types: dict[str, PetType] = {}
    for name in SEED_PET_TYPES:
        pet_type = await repo.find_pet_type_by_name(name)
        types[name] = pet_type if pet_type is not None else PetType(name=name)
    await repo.save_all(list(types.values()))

    pets = [
        Pet(
            name=entry["name"],
            pet_type=types[entry["pet_type"]],
            date_of_birth=entry["date_of_birth"],
            is_alive=entry["is_alive"],
        )
        for entry in SEED_PETS
    ]
    await repo.save_all(pets)
    return len(pets)


async def seed_users(db: AsyncSession, password: str) -> int:
    """Insert the demo accounts that don't exist yet. Returns accounts inserted."""
    store = UserRepository(db)
    hashed = hash_password(password)
    created = 0

    for entry in SEED_USERS:
        if await store.find_by_username(entry["username"]) is not None:
            continue
        if await store.find_by_email(entry["email"]) is not None:
            continue
        await store.save(
            User(
                username=entry["username"],
                email=entry["email"],
                first_name=entry["first_name"],
                last_name=entry["last_name"],
                role=entry["role"],
                hashed_password=hashed,
                enabled=True,
                locked=False,
            )
        )
        created += 1

    return created


async def seed(db: AsyncSession, password: str) -> None:
    pets = await seed_pets(db)
    users = await seed_users(db, password)
    logger.info(f"Seeding complete: {pets} pets, {users} users created")
