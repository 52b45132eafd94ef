"""
Repository layer package.

Services depend on the store protocols defined here rather than on
SQLAlchemy sessions directly.
"""

from pet_tracker.repositories.user_repository import UserRepository, UserStore  # noqa: F401
from pet_tracker.repositories.pet_repository import PetRepository  # noqa: F401
