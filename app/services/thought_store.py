"""In-memory, date-bucketed view of one user's thoughts"""
import logging
from contextlib import contextmanager
from typing import Optional, Set

from app.models.thought import ThoughtState, ThoughtWithNumber, ThoughtsByDate
from app.services.errors import ThoughtNotFoundError, ThoughtOperationInProgressError
from app.services.thought_service import ThoughtService
from app.utils.thought_utils import (
    assign_thought_numbers,
    find_thought,
    merge_and_process_thoughts,
    to_numbered,
)

logger = logging.getLogger(__name__)


class ThoughtStore:
    """
    Single source of truth for a signed-in user's loaded thoughts.

    Mutators await the remote call first and only touch local state once it
    succeeds; a failure is recorded in ``error`` and re-raised. The store is
    owned by one session and discarded on sign-out. ``reset()`` bumps a
    generation counter so results of requests started before it are dropped.
    """

    def __init__(self, service: ThoughtService, user_id: str):
        self._service = service
        self.user_id = user_id
        self._generation = 0
        self._pending_ids: Set[str] = set()
        self._init_state()

    def _init_state(self) -> None:
        self._thoughts: ThoughtsByDate = {}
        self._loading = False
        self._error: Optional[str] = None
        self._has_more = True
        self._last_loaded_date: Optional[str] = None
        self._initial_loading = False
        self._initial_loaded = False

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def thoughts(self) -> ThoughtsByDate:
        return self._thoughts

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def last_loaded_date(self) -> Optional[str]:
        return self._last_loaded_date

    @property
    def initial_loaded(self) -> bool:
        return self._initial_loaded

    @property
    def state(self) -> ThoughtState:
        """Detached copy of the current state"""
        return ThoughtState(
            thoughts={
                date: [t.model_copy() for t in bucket]
                for date, bucket in self._thoughts.items()
            },
            loading=self._loading,
            error=self._error,
            has_more=self._has_more,
            last_loaded_date=self._last_loaded_date,
        )

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    @contextmanager
    def _operation(self, thought_id: str):
        """Reject a second mutation of a thought while the first is in flight"""
        if thought_id in self._pending_ids:
            raise ThoughtOperationInProgressError(thought_id)
        self._pending_ids.add(thought_id)
        try:
            yield
        finally:
            self._pending_ids.discard(thought_id)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_initial(self) -> None:
        """
        Load the first page, at most once per session.

        Calls made while the load is in flight or after it completed are
        no-ops. A failed load may be retried.
        """
        if self._initial_loaded or self._initial_loading:
            logger.debug(f"Initial load for user {self.user_id} already done or running, skipping")
            return

        generation = self._generation
        self._initial_loading = True
        self._loading = True
        self._error = None

        try:
            page = await self._service.load_initial_thoughts(self.user_id)
        except Exception as e:
            if self._is_current(generation):
                self._error = str(e)
            logger.error(f"Failed to load data for user {self.user_id}: {e}")
            raise
        finally:
            if self._is_current(generation):
                self._loading = False
                self._initial_loading = False

        if not self._is_current(generation):
            logger.info(f"Discarding stale initial load for user {self.user_id}")
            return

        self._thoughts = page.thoughts
        self._has_more = page.has_more
        self._last_loaded_date = page.last_loaded_date
        self._initial_loaded = True
        logger.info(f"Data loaded successfully for user {self.user_id}")

    async def load_more(self) -> None:
        """Load the next older page and merge it into the current map"""
        if not self._has_more or not self._last_loaded_date or self._loading:
            return

        generation = self._generation
        self._loading = True

        try:
            page = await self._service.load_more_thoughts(self.user_id, self._last_loaded_date)
        except Exception as e:
            if self._is_current(generation):
                self._error = str(e)
            raise
        finally:
            if self._is_current(generation):
                self._loading = False

        if not self._is_current(generation):
            return

        if page.row_count == 0:
            self._has_more = False
            return

        self._thoughts = merge_and_process_thoughts(self._thoughts, [
            t for bucket in page.thoughts.values() for t in bucket
        ])
        self._has_more = page.has_more
        if page.last_loaded_date:
            self._last_loaded_date = page.last_loaded_date

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_thought(self, content: str, date: str, hidden: bool = False) -> ThoughtWithNumber:
        """Create a thought remotely, then insert it into its date bucket"""
        generation = self._generation
        try:
            created = await self._service.add_thought(self.user_id, content, date, hidden)
        except Exception as e:
            self._error = str(e)
            raise

        if not self._is_current(generation):
            return to_numbered(created)

        return self._insert(created)

    def _insert(self, thought) -> ThoughtWithNumber:
        """Insert into the bucket for thought.date unless its id is already there"""
        bucket = self._thoughts.setdefault(thought.date, [])

        for existing in bucket:
            if existing.id == thought.id:
                logger.info(f"Thought {thought.id} already exists, skipping duplicate add")
                return existing

        numbered = to_numbered(thought)
        bucket.append(numbered)
        assign_thought_numbers(bucket)
        return numbered

    async def update_thought(self, thought_id: str, content: str) -> None:
        """Change a thought's content; its number and position stay the same"""
        generation = self._generation
        with self._operation(thought_id):
            try:
                updated = await self._service.update_thought(self.user_id, thought_id, content)
            except Exception as e:
                self._error = str(e)
                raise

        if not self._is_current(generation):
            return

        location = find_thought(self._thoughts, thought_id)
        if location is None:
            logger.warning(f"Updated thought {thought_id} is not loaded locally")
            return

        date, index = location
        thought = self._thoughts[date][index]
        thought.content = updated.content
        thought.updated_at = updated.updated_at

    async def toggle_thought_hidden(self, thought_id: str) -> bool:
        """
        Flip a loaded thought's hidden flag; returns the new value.

        Raises:
            ThoughtNotFoundError: the id is not in the loaded state
        """
        location = find_thought(self._thoughts, thought_id)
        if location is None:
            error = ThoughtNotFoundError(thought_id)
            self._error = str(error)
            logger.error(f"Toggle hidden for {thought_id}: not present in local state")
            raise error

        date, index = location
        current_hidden = self._thoughts[date][index].hidden
        generation = self._generation

        with self._operation(thought_id):
            try:
                updated = await self._service.toggle_thought_hidden(
                    self.user_id, thought_id, current_hidden
                )
            except Exception as e:
                self._error = str(e)
                raise

        if not self._is_current(generation):
            return updated.hidden

        # The bucket may have been renumbered while the request was in flight
        location = find_thought(self._thoughts, thought_id)
        if location is not None:
            date, index = location
            thought = self._thoughts[date][index]
            thought.hidden = updated.hidden
            thought.updated_at = updated.updated_at

        return updated.hidden

    async def delete_thought(self, thought_id: str) -> None:
        """Delete a thought remotely, then drop it and renumber its bucket"""
        generation = self._generation
        with self._operation(thought_id):
            try:
                await self._service.delete_thought(self.user_id, thought_id)
            except Exception as e:
                self._error = str(e)
                raise

        if not self._is_current(generation):
            return

        location = find_thought(self._thoughts, thought_id)
        if location is None:
            return

        date, index = location
        bucket = self._thoughts[date]
        del bucket[index]
        if not assign_thought_numbers(bucket):
            del self._thoughts[date]

    def reset(self) -> None:
        """Back to the initial state (used on sign-out)"""
        self._generation += 1
        self._pending_ids.clear()
        self._init_state()
