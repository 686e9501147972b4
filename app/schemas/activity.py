"""Activity schemas."""
from typing import Optional
from pydantic import BaseModel

from app.schemas.common import Icon, Name, ORMModel


class ActivityCreate(BaseModel):
    name: Name
    icon: Icon
    enabled: bool = True


class ActivityUpdate(BaseModel):
    name: Optional[Name] = None
    icon: Optional[Icon] = None
    enabled: Optional[bool] = None


class ActivityResponse(ORMModel):
    id: str
    name: str
    icon: str
    enabled: bool
