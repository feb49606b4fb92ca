"""Health check endpoints"""

from fastapi import APIRouter, Request

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def health_check(request: Request):
    """Basic health check endpoint"""
    sessions = getattr(request.app.state, "sessions", None)
    active = 0
    if sessions is not None:
        sessions.evict_expired()
        active = len(sessions)
    return {
        "status": "healthy",
        "service": "mindtrace-backend",
        "active_sessions": active,
    }
