"""Host and location schemas."""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from app.core.sanitization import MAX_ADDRESS_LENGTH, MAX_DISCLAIMER_LENGTH, sanitize_email, sanitize_text
from app.schemas.common import LocalDateTime, Name, ORMModel, RecordId


class HostCreate(BaseModel):
    name: Name
    email: str
    admin_secret: str = Field(..., min_length=6, max_length=128)
    subject_id: Optional[str] = Field(None, max_length=128)
    disclaimer: Optional[str] = Field(None, max_length=MAX_DISCLAIMER_LENGTH)

    @field_validator('email')
    @classmethod
    def sanitize_email_field(cls, v: str) -> str:
        return sanitize_email(v)


class HostUpdate(BaseModel):
    """Partial update: only the fields sent are changed."""
    name: Optional[Name] = None
    email: Optional[str] = None
    admin_secret: Optional[str] = Field(None, min_length=6, max_length=128)
    subject_id: Optional[str] = Field(None, max_length=128)
    disclaimer: Optional[str] = Field(None, max_length=MAX_DISCLAIMER_LENGTH)

    @field_validator('email')
    @classmethod
    def sanitize_email_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_email(v) if v is not None else v


class HostResponse(ORMModel):
    id: str
    name: str
    email: str
    subject_id: Optional[str] = None
    disclaimer: Optional[str] = None
    created_at: LocalDateTime


class AdminSecretRequest(BaseModel):
    secret: str = Field(..., min_length=1, max_length=128)


class LocationCreate(BaseModel):
    name: Name
    address: str = Field("", max_length=MAX_ADDRESS_LENGTH)
    activity_ids: List[RecordId] = Field(default_factory=list)

    @field_validator('address')
    @classmethod
    def sanitize_address(cls, v: str) -> str:
        return sanitize_text(v, max_length=MAX_ADDRESS_LENGTH)


class LocationUpdate(BaseModel):
    name: Optional[Name] = None
    address: Optional[str] = Field(None, max_length=MAX_ADDRESS_LENGTH)

    @field_validator('address')
    @classmethod
    def sanitize_address(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_text(v, max_length=MAX_ADDRESS_LENGTH) if v is not None else v


class LocationActivitiesUpdate(BaseModel):
    activity_ids: List[RecordId]


class LocationResponse(ORMModel):
    id: str
    host_id: str
    name: str
    address: str
    activity_ids: List[str]
    created_at: LocalDateTime
