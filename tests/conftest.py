"""Shared test fixtures and configuration."""
import os
from datetime import datetime, timedelta, timezone

# Settings and the engine are built at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("TIMEZONE", "America/New_York")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.main import app  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.api.deps import get_db  # noqa: E402
from app.core.constants import REWARD_TYPE_GLOBAL, REWARD_TYPE_HOST, REWARD_TYPE_PET  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.services.activity import create_activity  # noqa: E402
from app.services.athlete import register_athlete, sign_disclaimer  # noqa: E402
from app.services.host import create_host  # noqa: E402
from app.services.location import create_location  # noqa: E402
from app.services.pet import create_pet  # noqa: E402
from app.services.reward import create_reward  # noqa: E402


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

HOST_SUBJECT = "host-subject-1"
OTHER_HOST_SUBJECT = "host-subject-2"


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests(request):
    """Disable rate limiting for all tests except rate limiting tests."""
    from app.core.rate_limit import limiter

    if "rate_limit" in request.keywords:
        limiter.enabled = True
        limiter.reset()
        yield
        limiter.reset()
    else:
        limiter.enabled = False
        yield
        limiter.enabled = True


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with a test database."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class Clock:
    """Server clock for check-in admission, pinned to Monday 2024-06-03 10:00 EDT."""

    def __init__(self):
        self.now = datetime(2024, 6, 3, 14, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def set(self, value):
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        self.now = value.astimezone(timezone.utc)

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock(monkeypatch):
    pinned = Clock()
    monkeypatch.setattr("app.services.checkin.utcnow", pinned)
    return pinned


# Tokens

def _bearer(claims: dict) -> dict:
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


@pytest.fixture
def super_admin_headers():
    return _bearer({"sub": "admin-subject", "email": "admin@example.com", "cognito:groups": ["super-admins"]})


@pytest.fixture
def host_headers():
    """Bearer headers for the account linked to the ``host`` fixture."""
    return _bearer({"sub": HOST_SUBJECT, "email": "host@example.com", "cognito:groups": ["hosts"]})


@pytest.fixture
def other_host_headers():
    return _bearer({"sub": OTHER_HOST_SUBJECT, "cognito:groups": ["hosts"]})


@pytest.fixture
def athlete_headers():
    """A signed-in caller without any group."""
    return _bearer({"sub": "athlete-subject", "email": "runner@example.com"})


# Domain records

@pytest.fixture
def activity(db_session):
    return create_activity(db_session, "Run", "directions_run")


@pytest.fixture
def host(db_session):
    return create_host(
        db_session,
        name="Riverside Running Club",
        email="host@example.com",
        admin_secret="kiosk-secret",
        subject_id=HOST_SUBJECT,
        disclaimer="Participate at your own risk.",
    )


@pytest.fixture
def other_host(db_session):
    return create_host(
        db_session,
        name="Hilltop Hikers",
        email="hilltop@example.com",
        admin_secret="hilltop-secret",
        subject_id=OTHER_HOST_SUBJECT,
    )


@pytest.fixture
def location(db_session, host, activity):
    return create_location(db_session, host.id, "Boathouse", "1 River Rd", [activity.id])


@pytest.fixture
def other_location(db_session, other_host, activity):
    return create_location(db_session, other_host.id, "Summit Lot", "9 Ridge Way", [activity.id])


@pytest.fixture
def athlete(db_session, host, other_host):
    """An athlete who has signed both hosts' disclaimers."""
    athlete = register_athlete(db_session, "Jordan", "Rivera", "jordan@example.com")
    sign_disclaimer(db_session, athlete.id, host.id)
    sign_disclaimer(db_session, athlete.id, other_host.id)
    return athlete


@pytest.fixture
def pet(db_session, athlete):
    return create_pet(db_session, athlete.id, "Biscuit")


@pytest.fixture
def global_reward(db_session):
    return create_reward(db_session, "Bronze", "military_tech", 2, REWARD_TYPE_GLOBAL)


@pytest.fixture
def host_reward(db_session, host):
    return create_reward(db_session, "Club Mug", "local_cafe", 2, REWARD_TYPE_HOST, host_id=host.id)


@pytest.fixture
def pet_reward(db_session):
    return create_reward(db_session, "Good Dog", "pets", 1, REWARD_TYPE_PET)
