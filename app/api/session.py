"""Session lifecycle: a thought store exists between sign-in and sign-out"""
import logging

from fastapi import APIRouter
from pydantic import BaseModel

from app.api.errors import to_http_exception
from app.dependencies import CurrentUserId, SessionRegistryDep
from app.models.thought import ThoughtState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/session", tags=["session"])


class SignOutResponse(BaseModel):
    message: str


@router.post("", response_model=ThoughtState)
async def sign_in(user_id: CurrentUserId, sessions: SessionRegistryDep):
    """
    Start (or resume) the user's session and load the first page of thoughts.

    Signing in again while a session exists keeps the already loaded state.
    """
    store = sessions.sign_in(user_id)
    try:
        await store.load_initial()
    except Exception as e:
        raise to_http_exception(e)
    return store.state


@router.delete("", response_model=SignOutResponse)
async def sign_out(user_id: CurrentUserId, sessions: SessionRegistryDep):
    if sessions.sign_out(user_id):
        return SignOutResponse(message="Signed out")
    return SignOutResponse(message="No active session")
