"""Thought domain models"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, field_validator


class ThoughtBase(BaseModel):
    """Base thought fields"""
    user_id: str
    date: str  # YYYY-MM-DD
    content: str
    hidden: bool = False


class ThoughtCreate(ThoughtBase):
    """Thought creation model"""

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content must not be empty")
        return value


class ThoughtUpdate(BaseModel):
    """Thought update model - all fields optional"""
    content: Optional[str] = None
    hidden: Optional[bool] = None
    updated_at: Optional[datetime] = None


class Thought(ThoughtBase):
    """Complete thought model from database"""
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ThoughtWithNumber(Thought):
    """Thought plus its per-date display number (never persisted)"""
    number: int = 0


ThoughtsByDate = Dict[str, List[ThoughtWithNumber]]


class ThoughtPage(BaseModel):
    """One page of thoughts returned by a date-bucketed load"""
    thoughts: ThoughtsByDate = {}
    has_more: bool = False
    last_loaded_date: Optional[str] = None
    row_count: int = 0


class ThoughtState(BaseModel):
    """Snapshot of a thought store"""
    thoughts: ThoughtsByDate = {}
    loading: bool = False
    error: Optional[str] = None
    has_more: bool = True
    last_loaded_date: Optional[str] = None
