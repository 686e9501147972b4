"""Check-in schemas."""
from pydantic import BaseModel

from app.schemas.common import ClientTimestamp, LocalDateTime, ORMModel, RecordId


class CheckInCreate(BaseModel):
    athlete_id: RecordId
    host_id: RecordId
    location_id: RecordId
    activity_id: RecordId
    timestamp: ClientTimestamp = None  # Defaults to now


class CheckInReassign(BaseModel):
    activity_id: RecordId


class CheckInResponse(ORMModel):
    id: str
    athlete_id: str
    host_id: str
    location_id: str
    activity_id: str
    timestamp: LocalDateTime
    week_start: LocalDateTime


class CheckInRecorded(CheckInResponse):
    first_of_week: bool = False


class PetCheckInCreate(BaseModel):
    athlete_id: RecordId
    pet_id: RecordId
    host_id: RecordId
    location_id: RecordId
    timestamp: ClientTimestamp = None


class PetCheckInResponse(ORMModel):
    id: str
    athlete_id: str
    pet_id: str
    host_id: str
    location_id: str
    timestamp: LocalDateTime
