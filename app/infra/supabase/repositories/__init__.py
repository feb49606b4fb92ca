"""Repository factory and exports"""
from supabase import Client  # type: ignore
from .thoughts import ThoughtRepository
from .user_profiles import UserProfileRepository


class RepositoryFactory:
    """Factory for creating repository instances"""

    def __init__(self, client: Client):
        self._client = client
        self._thoughts: ThoughtRepository = None
        self._user_profiles: UserProfileRepository = None

    @property
    def thoughts(self) -> ThoughtRepository:
        """Get thoughts repository"""
        if self._thoughts is None:
            self._thoughts = ThoughtRepository(self._client)
        return self._thoughts

    @property
    def user_profiles(self) -> UserProfileRepository:
        """Get user profiles repository"""
        if self._user_profiles is None:
            self._user_profiles = UserProfileRepository(self._client)
        return self._user_profiles


__all__ = [
    'RepositoryFactory',
    'ThoughtRepository',
    'UserProfileRepository',
]
