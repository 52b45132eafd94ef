"""
SQLAlchemy ORM models package.

All models are imported here so that Base.metadata knows every table
before create_all() runs, and so other modules can import from
pet_tracker.models directly.
"""

from pet_tracker.models.user import User, Role  # noqa: F401
from pet_tracker.models.pet_type import PetType  # noqa: F401
from pet_tracker.models.pet import Pet  # noqa: F401
