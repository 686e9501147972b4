"""Database models."""
from app.db.models.athlete import Athlete
from app.db.models.disclaimer import DisclaimerSignature
from app.db.models.host import Host
from app.db.models.location import Location, LocationActivity
from app.db.models.activity import Activity
from app.db.models.pet import Pet
from app.db.models.checkin import CheckIn
from app.db.models.pet_checkin import PetCheckIn
from app.db.models.reward import Reward
from app.db.models.reward_claim import RewardClaim

__all__ = [
    "Athlete",
    "DisclaimerSignature",
    "Host",
    "Location",
    "LocationActivity",
    "Activity",
    "Pet",
    "CheckIn",
    "PetCheckIn",
    "Reward",
    "RewardClaim",
]
