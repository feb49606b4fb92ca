from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from app.api.errors import to_http_exception
from app.dependencies import ThoughtStoreDep
from app.models.thought import ThoughtState, ThoughtWithNumber
from app.utils.date_utils import get_today_date_string

router = APIRouter(prefix="/api/thoughts", tags=["thoughts"])


class AddThoughtRequest(BaseModel):
    content: str
    date: Optional[str] = None  # defaults to today
    hidden: bool = False


class UpdateThoughtRequest(BaseModel):
    content: str


class ToggleHiddenResponse(BaseModel):
    id: str
    hidden: bool


class DeleteThoughtResponse(BaseModel):
    id: str
    message: str


@router.get("", response_model=ThoughtState)
async def get_thoughts(store: ThoughtStoreDep):
    """
    Current view of the user's thoughts, grouped by date.

    Performs the initial load if the session has not loaded yet.
    """
    try:
        await store.load_initial()
    except Exception as e:
        raise to_http_exception(e)
    return store.state


@router.post("/more", response_model=ThoughtState)
async def load_more_thoughts(store: ThoughtStoreDep):
    """Load the next page of older dates and return the merged view"""
    try:
        await store.load_more()
    except Exception as e:
        raise to_http_exception(e)
    return store.state


@router.post("", response_model=ThoughtWithNumber, status_code=201)
async def add_thought(request: AddThoughtRequest, store: ThoughtStoreDep):
    try:
        return await store.add_thought(
            request.content,
            request.date or get_today_date_string(),
            request.hidden,
        )
    except Exception as e:
        raise to_http_exception(e)


@router.patch("/{thought_id}", response_model=ThoughtState)
async def update_thought(thought_id: str, request: UpdateThoughtRequest, store: ThoughtStoreDep):
    try:
        await store.update_thought(thought_id, request.content)
    except Exception as e:
        raise to_http_exception(e)
    return store.state


@router.post("/{thought_id}/toggle-hidden", response_model=ToggleHiddenResponse)
async def toggle_thought_hidden(thought_id: str, store: ThoughtStoreDep):
    try:
        hidden = await store.toggle_thought_hidden(thought_id)
    except Exception as e:
        raise to_http_exception(e)
    return ToggleHiddenResponse(id=thought_id, hidden=hidden)


@router.delete("/{thought_id}", response_model=DeleteThoughtResponse)
async def delete_thought(thought_id: str, store: ThoughtStoreDep):
    try:
        await store.delete_thought(thought_id)
    except Exception as e:
        raise to_http_exception(e)
    return DeleteThoughtResponse(id=thought_id, message="Thought deleted")
