from fastapi import APIRouter
from app.api import health, profile, session, thoughts

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health.router)
api_router.include_router(session.router)
api_router.include_router(thoughts.router)
api_router.include_router(profile.router)
