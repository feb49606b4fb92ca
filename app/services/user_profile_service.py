"""User profile access and life-day labels"""
import logging
from datetime import date, datetime, timezone
from typing import Optional

from app.infra.supabase.repositories import RepositoryFactory
from app.models.user import UserProfile, UserProfileCreate, UserProfileUpdate
from app.services import errors
from app.services.errors import ThoughtServiceError, ThoughtValidationError
from app.utils.date_utils import calculate_life_days, parse_date

logger = logging.getLogger(__name__)


class UserProfileService:
    """Service layer for the optional per-user profile (birth date)"""

    def __init__(self, repositories: RepositoryFactory):
        self._repositories = repositories

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Fetch a user's profile; None if they have not created one"""
        try:
            return await self._repositories.user_profiles.find_by_user(user_id)
        except Exception as e:
            logger.error(f"Load profile error: {e}", exc_info=True)
            raise ThoughtServiceError(errors.LOAD_PROFILE_FAILED) from None

    async def update_birth_date(self, user_id: str, birth_date: Optional[date]) -> UserProfile:
        """
        Set or clear a user's birth date.

        Updates the existing profile, or creates one if the user has none.
        """
        repo = self._repositories.user_profiles
        try:
            updated = await repo.update_by_user(
                user_id,
                UserProfileUpdate(birth_date=birth_date, updated_at=datetime.now(timezone.utc)),
            )
            if updated is not None:
                return updated

            return await repo.create(UserProfileCreate(user_id=user_id, birth_date=birth_date))
        except Exception as e:
            logger.error(f"Update profile error: {e}", exc_info=True)
            raise ThoughtServiceError(errors.UPDATE_PROFILE_FAILED) from None

    async def get_life_day(self, user_id: str, date_string: str) -> Optional[int]:
        """Day-of-life number for a date, or None without a usable birth date"""
        try:
            parse_date(date_string)
        except ValueError:
            raise ThoughtValidationError(f"Invalid date '{date_string}', expected YYYY-MM-DD") from None

        profile = await self.get_profile(user_id)
        if profile is None:
            return None
        return calculate_life_days(date_string, profile.birth_date)
