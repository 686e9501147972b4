"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here for Alembic to detect them
from app.db.models.athlete import Athlete  # noqa: F401, E402
from app.db.models.disclaimer import DisclaimerSignature  # noqa: F401, E402
from app.db.models.host import Host  # noqa: F401, E402
from app.db.models.location import Location, LocationActivity  # noqa: F401, E402
from app.db.models.activity import Activity  # noqa: F401, E402
from app.db.models.pet import Pet  # noqa: F401, E402
from app.db.models.checkin import CheckIn  # noqa: F401, E402
from app.db.models.pet_checkin import PetCheckIn  # noqa: F401, E402
from app.db.models.reward import Reward  # noqa: F401, E402
from app.db.models.reward_claim import RewardClaim  # noqa: F401, E402
