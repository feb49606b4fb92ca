"""Services module"""

from app.services.errors import (
    ThoughtNotFoundError,
    ThoughtOperationInProgressError,
    ThoughtServiceError,
    ThoughtValidationError,
)
from app.services.thought_service import ThoughtService
from app.services.thought_store import ThoughtStore
from app.services.session_registry import SessionRegistry
from app.services.user_profile_service import UserProfileService

__all__ = [
    "ThoughtService",
    "ThoughtStore",
    "SessionRegistry",
    "UserProfileService",
    "ThoughtServiceError",
    "ThoughtValidationError",
    "ThoughtNotFoundError",
    "ThoughtOperationInProgressError",
]
