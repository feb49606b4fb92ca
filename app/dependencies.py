"""
Dependency injection for FastAPI routes.

Services live on ``app.state`` (built in the lifespan); thought stores are
looked up per authenticated user from the session registry.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, Request

from app.middleware.auth import get_current_user_id
from app.services.session_registry import SessionRegistry
from app.services.thought_store import ThoughtStore
from app.services.user_profile_service import UserProfileService


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_user_profile_service(request: Request) -> UserProfileService:
    return request.app.state.user_profile_service


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
SessionRegistryDep = Annotated[SessionRegistry, Depends(get_session_registry)]
UserProfileServiceDep = Annotated[UserProfileService, Depends(get_user_profile_service)]


def get_thought_store(user_id: CurrentUserId, sessions: SessionRegistryDep) -> ThoughtStore:
    """The signed-in user's store; 401 if they have not started a session"""
    store = sessions.get(user_id)
    if store is None:
        raise HTTPException(
            status_code=401,
            detail="No active session. Sign in first."
        )
    return store


ThoughtStoreDep = Annotated[ThoughtStore, Depends(get_thought_store)]
