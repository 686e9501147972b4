"""Pydantic schemas for request/response validation."""
from app.schemas.activity import ActivityCreate, ActivityResponse, ActivityUpdate
from app.schemas.athlete import AthleteCreate, AthleteResponse, AthleteUpdate, DisclaimerStatus
from app.schemas.checkin import (
    CheckInCreate,
    CheckInReassign,
    CheckInRecorded,
    CheckInResponse,
    PetCheckInCreate,
    PetCheckInResponse,
)
from app.schemas.common import CountResponse, ErrorDetail, ErrorResponse, SuccessResponse
from app.schemas.host import (
    AdminSecretRequest,
    HostCreate,
    HostResponse,
    HostUpdate,
    LocationActivitiesUpdate,
    LocationCreate,
    LocationResponse,
    LocationUpdate,
)
from app.schemas.pet import PetCreate, PetExistsResponse, PetResponse, PetUpdate
from app.schemas.reward import (
    AthleteProgressResponse,
    DefaultRewardsResponse,
    HostRewardCreate,
    OneAwayItem,
    OneAwayResponse,
    PetProgressResponse,
    RewardClaimCreate,
    RewardClaimResponse,
    RewardCreate,
    RewardProgressItem,
    RewardResponse,
    RewardUpdate,
)

__all__ = [
    "ActivityCreate",
    "ActivityResponse",
    "ActivityUpdate",
    "AthleteCreate",
    "AthleteResponse",
    "AthleteUpdate",
    "DisclaimerStatus",
    "CheckInCreate",
    "CheckInReassign",
    "CheckInRecorded",
    "CheckInResponse",
    "PetCheckInCreate",
    "PetCheckInResponse",
    "CountResponse",
    "ErrorDetail",
    "ErrorResponse",
    "SuccessResponse",
    "AdminSecretRequest",
    "HostCreate",
    "HostResponse",
    "HostUpdate",
    "LocationActivitiesUpdate",
    "LocationCreate",
    "LocationResponse",
    "LocationUpdate",
    "PetCreate",
    "PetExistsResponse",
    "PetResponse",
    "PetUpdate",
    "AthleteProgressResponse",
    "DefaultRewardsResponse",
    "HostRewardCreate",
    "OneAwayItem",
    "OneAwayResponse",
    "PetProgressResponse",
    "RewardClaimCreate",
    "RewardClaimResponse",
    "RewardCreate",
    "RewardProgressItem",
    "RewardResponse",
    "RewardUpdate",
]
