"""Domain models for the application"""
from .thought import (
    Thought,
    ThoughtCreate,
    ThoughtUpdate,
    ThoughtWithNumber,
    ThoughtsByDate,
    ThoughtPage,
    ThoughtState,
)
from .user import UserProfile, UserProfileCreate, UserProfileUpdate

__all__ = [
    'Thought', 'ThoughtCreate', 'ThoughtUpdate', 'ThoughtWithNumber',
    'ThoughtsByDate', 'ThoughtPage', 'ThoughtState',
    'UserProfile', 'UserProfileCreate', 'UserProfileUpdate',
]
