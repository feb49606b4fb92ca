"""User profiles repository"""
from typing import Optional

from supabase import Client  # type: ignore

from app.models.user import UserProfile, UserProfileCreate, UserProfileUpdate

from .base import BaseRepository


class UserProfileRepository(BaseRepository[UserProfile, UserProfileCreate, UserProfileUpdate]):
    """Repository for user profile operations"""

    def __init__(self, client: Client):
        super().__init__(client, "user_profiles", UserProfile)

    async def find_by_user(self, user_id: str) -> Optional[UserProfile]:
        """Find the profile belonging to a user"""
        profiles = await self.find_by_filters({self.owner_column: user_id}, limit=1)
        return profiles[0] if profiles else None

    async def update_by_user(self, user_id: str, data: UserProfileUpdate) -> Optional[UserProfile]:
        """Update the profile belonging to a user; None if the user has no profile"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')
        response = (
            self._table()
            .update(data_dict)
            .eq(self.owner_column, user_id)
            .execute()
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])
