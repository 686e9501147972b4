"""Main API router for v1."""
from fastapi import APIRouter

from app.api.v1.endpoints import activities, athletes, checkins, claims, hosts, pets, rewards

api_router = APIRouter(prefix="/api/v1")

# Include all endpoint routers
api_router.include_router(athletes.router, prefix="/athletes", tags=["Athletes"])
api_router.include_router(pets.router, prefix="/pets", tags=["Pets"])
api_router.include_router(hosts.router, prefix="/hosts", tags=["Hosts"])
api_router.include_router(activities.router, prefix="/activities", tags=["Activities"])
api_router.include_router(rewards.router, prefix="/rewards", tags=["Rewards"])
api_router.include_router(checkins.router, tags=["Check-ins"])
api_router.include_router(claims.router, prefix="/claims", tags=["Claims"])
