"""Reward, progress and claim schemas."""
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from app.schemas.common import Icon, LocalDateTime, Name, ORMModel, RecordId


class HostRewardCreate(BaseModel):
    name: Name
    icon: Icon
    required_count: int = Field(..., ge=1, le=10000)


class RewardCreate(HostRewardCreate):
    reward_type: Literal["global", "pet"]


class RewardUpdate(BaseModel):
    name: Optional[Name] = None
    icon: Optional[Icon] = None
    required_count: Optional[int] = Field(None, ge=1, le=10000)


class RewardResponse(ORMModel):
    id: str
    name: str
    icon: str
    required_count: int
    reward_type: str
    host_id: Optional[str] = None


class DefaultRewardsResponse(BaseModel):
    global_rewards: List[RewardResponse]
    pet_rewards: List[RewardResponse]


class RewardProgressItem(BaseModel):
    reward_id: str
    current_count: int
    required: int
    eligible: bool


class AthleteProgressResponse(BaseModel):
    global_rewards: List[RewardProgressItem]
    host_rewards: List[RewardProgressItem]


class PetProgressResponse(BaseModel):
    pet_rewards: List[RewardProgressItem]


class OneAwayItem(BaseModel):
    participant_id: str
    reward_id: str
    current_count: int
    required_count: int


class OneAwayResponse(BaseModel):
    global_one_away: List[OneAwayItem]
    host_one_away: List[OneAwayItem]


class RewardClaimCreate(BaseModel):
    athlete_id: RecordId
    reward_id: RecordId
    host_id: RecordId
    location_id: RecordId
    pet_id: Optional[RecordId] = None


class RewardClaimResponse(ORMModel):
    id: str
    athlete_id: str
    reward_id: str
    host_id: str
    location_id: str
    pet_id: Optional[str] = None
    claimed_at: LocalDateTime
