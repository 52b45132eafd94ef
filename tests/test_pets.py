"""
Tests for the read-only pet endpoints and the startup seeder.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pet_tracker.models.pet import Pet
from pet_tracker.models.pet_type import PetType
from pet_tracker.models.user import Role, User
from pet_tracker.repositories.pet_repository import PetRepository
from pet_tracker.repositories.user_repository import UserRepository
from pet_tracker.security import verify_password
from pet_tracker.seeder import SEED_PETS, SEED_USERS, seed, seed_pets, seed_users


API = "/api/v1"


async def _seed_pets(db_engine) -> None:
    async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        await seed_pets(session)
        session.add(PetType(name="Dragon", deleted=True))
        await session.commit()


class TestPetEndpoints:

    async def test_requires_authentication(self, client):
        resp = await client.get(f"{API}/pets")
        assert resp.status_code == 401

    async def test_list_pets(self, client, db_engine, user_auth):
        await _seed_pets(db_engine)

        resp = await client.get(f"{API}/pets", headers=user_auth.headers)
        assert resp.status_code == 200
        assert [p["name"] for p in resp.json()] == [p["name"] for p in SEED_PETS]

    async def test_get_pet(self, client, db_engine, user_auth):
        await _seed_pets(db_engine)
        listing = await client.get(f"{API}/pets", headers=user_auth.headers)
        pet_id = listing.json()[0]["id"]

        resp = await client.get(f"{API}/pets/{pet_id}", headers=user_auth.headers)
        assert resp.status_code == 200
        assert resp.json()["name"] == SEED_PETS[0]["name"]
        assert resp.json()["is_alive"] is True

    async def test_unknown_pet_returns_404(self, client, user_auth):
        resp = await client.get(f"{API}/pets/9999", headers=user_auth.headers)
        assert resp.status_code == 404

    async def test_pet_types_hide_deleted(self, client, db_engine, user_auth):
        await _seed_pets(db_engine)

        resp = await client.get(f"{API}/pet-types", headers=user_auth.headers)
        assert resp.status_code == 200
        names = {t["name"] for t in resp.json()}
        assert "Dragon" not in names
        assert {"Dog", "Cat", "Rabbit"} <= names


class TestSeeder:

    async def test_seeds_one_account_per_role(self, db_session):
        await seed(db_session, "Password123!")

        users = await UserRepository(db_session).find_all()
        assert {u.role for u in users} == {Role.ADMIN, Role.MODERATOR, Role.USER}
        for user in users:
            assert user.enabled is True
            assert user.locked is False
            assert verify_password("Password123!", user.hashed_password)

    async def test_seeding_twice_is_idempotent(self, db_session):
        await seed(db_session, "Password123!")
        await seed(db_session, "Password123!")

        assert len(await UserRepository(db_session).find_all()) == len(SEED_USERS)
        assert await PetRepository(db_session).count() == len(SEED_PETS)

    async def test_existing_username_is_skipped(self, db_session, make_user):
        existing = await make_user("ADMIN", role=Role.USER)

        created = await seed_users(db_session, "Password123!")

        assert created == len(SEED_USERS) - 1
        result = await db_session.execute(select(User).where(User.role == Role.ADMIN))
        assert result.scalars().all() == []
        assert existing.role == Role.USER

    async def test_pets_not_seeded_when_table_has_pets(self, db_session):
        dog = PetType(name="Dog")
        db_session.add_all([dog, Pet(name="Rex", pet_type=dog)])
        await db_session.flush()

        assert await seed_pets(db_session) == 0
        assert await PetRepository(db_session).count() == 1

    async def test_deleting_owner_keeps_pet(self, db_session, make_user):
        owner = await make_user("owner")
        dog = PetType(name="Dog")
        pet = Pet(name="Rex", pet_type=dog, owner_id=owner.id)
        db_session.add_all([dog, pet])
        await db_session.flush()
        pet_id = pet.id

        await UserRepository(db_session).delete_by_id(owner.id)
        db_session.expire(pet)

        reloaded = await PetRepository(db_session).find_by_id(pet_id)
        assert reloaded is not None
        assert reloaded.owner_id is None
        await db_session.refresh(reloaded, ["owner"])
        assert reloaded.owner is None
