"""Thoughts repository"""
from typing import List, Optional, Sequence

from supabase import Client  # type: ignore

from app.models.thought import Thought, ThoughtCreate, ThoughtUpdate

from .base import BaseRepository


class ThoughtRepository(BaseRepository[Thought, ThoughtCreate, ThoughtUpdate]):
    """Repository for thoughts operations"""

    def __init__(self, client: Client):
        super().__init__(client, "thoughts", Thought)

    async def find_recent_dates(
        self,
        user_id: str,
        before: Optional[str] = None,
        limit: int = 100,
    ) -> List[str]:
        """
        Date values of a user's most recent thoughts, newest first.

        One entry per row, so the same date can repeat.

        Args:
            user_id: owner of the thoughts
            before: only dates strictly older than this YYYY-MM-DD
            limit: maximum number of rows to read
        """
        query = (
            self._table()
            .select("date")
            .eq(self.owner_column, user_id)
        )

        if before:
            query = query.lt("date", before)

        response = query.order("date", desc=True).limit(limit).execute()
        return [row["date"] for row in response.data]

    async def find_by_dates(self, user_id: str, dates: Sequence[str]) -> List[Thought]:
        """All thoughts of a user on the given dates, newest date and newest thought first"""
        if not dates:
            return []

        response = (
            self._table()
            .select("*")
            .eq(self.owner_column, user_id)
            .in_("date", list(dates))
            .order("date", desc=True)
            .order("created_at", desc=True)
            .execute()
        )
        return self._to_models(response.data)
