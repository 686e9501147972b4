"""Athlete schemas."""
from typing import Annotated, Optional
from pydantic import BaseModel, BeforeValidator, Field, field_validator

from app.core.sanitization import sanitize_email, sanitize_text
from app.schemas.common import LocalDateTime, Name, ORMModel

Email = Annotated[str, BeforeValidator(sanitize_email)]


class AthleteProfileFields(BaseModel):
    middle_initial: Optional[str] = Field(None, max_length=1)
    employer: Optional[str] = Field(None, max_length=100)
    shirt_gender: Optional[str] = Field(None, max_length=20)
    shirt_size: Optional[str] = Field(None, max_length=10)
    emergency_name: Optional[str] = Field(None, max_length=100)
    emergency_phone: Optional[str] = Field(None, max_length=30)

    @field_validator('middle_initial')
    @classmethod
    def uppercase_initial(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() or None if v is not None else v

    @field_validator('employer', 'shirt_gender', 'shirt_size', 'emergency_name', 'emergency_phone')
    @classmethod
    def sanitize_optional_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return sanitize_text(v, max_length=100) or None


class AthleteCreate(AthleteProfileFields):
    first_name: Name
    last_name: Name
    email: Email
    legacy_count: int = Field(0, ge=0)


class AthleteUpdate(AthleteProfileFields):
    """Partial update: only the fields sent are changed."""
    first_name: Optional[Name] = None
    last_name: Optional[Name] = None
    email: Optional[Email] = None
    legacy_count: Optional[int] = Field(None, ge=0)


class AthleteResponse(ORMModel):
    id: str
    first_name: str
    last_name: str
    middle_initial: Optional[str] = None
    email: str
    employer: Optional[str] = None
    shirt_gender: Optional[str] = None
    shirt_size: Optional[str] = None
    emergency_name: Optional[str] = None
    emergency_phone: Optional[str] = None
    legacy_count: int
    weeks_active: int = 0
    created_at: LocalDateTime


class DisclaimerStatus(BaseModel):
    host_id: str
    signed: bool
    signed_at: Optional[LocalDateTime] = None
    disclaimer: Optional[str] = None
