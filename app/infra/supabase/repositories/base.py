"""Base repository with common CRUD operations"""
from typing import Generic, TypeVar, Type, Optional, List, Dict, Any
from pydantic import BaseModel
from supabase import Client  # type: ignore

T = TypeVar('T', bound=BaseModel)
CreateT = TypeVar('CreateT', bound=BaseModel)
UpdateT = TypeVar('UpdateT', bound=BaseModel)


class BaseRepository(Generic[T, CreateT, UpdateT]):
    """
    Base repository providing owner-scoped table operations.
    Hides Supabase implementation details from the rest of the application.
    Every query filters on ``owner_column`` so one user never sees another's rows.
    """

    owner_column = "user_id"

    def __init__(self, client: Client, table_name: str, model_class: Type[T]):
        self._client = client
        self._table_name = table_name
        self._model_class = model_class

    def _table(self):
        return self._client.table(self._table_name)

    def _to_model(self, data: Dict[str, Any]) -> T:
        """Convert database dict to domain model"""
        return self._model_class.model_validate(data)

    def _to_models(self, data: List[Dict[str, Any]]) -> List[T]:
        """Convert list of database dicts to domain models"""
        return [self._to_model(item) for item in data]

    async def find_for_user(self, id: str, user_id: str) -> Optional[T]:
        """Find a single record by ID owned by user_id"""
        response = (
            self._table()
            .select("*")
            .eq("id", id)
            .eq(self.owner_column, user_id)
            .execute()
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def find_by_filters(self, filters: Dict[str, Any], limit: Optional[int] = None) -> List[T]:
        """Find records matching filters"""
        query = self._table().select("*")

        for key, value in filters.items():
            query = query.eq(key, value)

        if limit:
            query = query.limit(limit)

        response = query.execute()
        return self._to_models(response.data)

    async def create(self, data: CreateT) -> T:
        """Create a new record"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')
        response = self._table().insert(data_dict).execute()

        if not response.data:
            raise ValueError("Failed to create record")

        return self._to_model(response.data[0])

    async def update_for_user(self, id: str, user_id: str, data: UpdateT) -> Optional[T]:
        """Update a record by ID; returns None if no row owned by user_id matched"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')

        if not data_dict:
            # No fields to update
            return await self.find_for_user(id, user_id)

        response = (
            self._table()
            .update(data_dict)
            .eq("id", id)
            .eq(self.owner_column, user_id)
            .execute()
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def delete_for_user(self, id: str, user_id: str) -> bool:
        """Delete a record by ID; returns False if no row owned by user_id matched"""
        response = (
            self._table()
            .delete()
            .eq("id", id)
            .eq(self.owner_column, user_id)
            .execute()
        )
        return len(response.data) > 0
