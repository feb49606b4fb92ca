# API module exports
from app.api import health, profile, session, thoughts
from app.api.base import api_router

__all__ = ["health", "profile", "session", "thoughts", "api_router"]
