"""
Pydantic schemas for pet endpoints.
"""

import uuid
from datetime import date

from pydantic import BaseModel


class PetTypeResponse(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class PetResponse(BaseModel):
    id: int
    name: str
    date_of_birth: date | None
    is_alive: bool
    pet_type_id: int
    owner_id: uuid.UUID | None

    model_config = {"from_attributes": True}
