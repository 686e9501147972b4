"""Pet schemas."""
from pydantic import BaseModel

from app.schemas.common import LocalDateTime, Name, ORMModel


class PetCreate(BaseModel):
    name: Name


class PetUpdate(BaseModel):
    name: Name


class PetResponse(ORMModel):
    id: str
    athlete_id: str
    name: str
    created_at: LocalDateTime


class PetExistsResponse(BaseModel):
    exists: bool
