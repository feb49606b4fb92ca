"""Remote access to a user's thoughts, paginated by calendar date"""
import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from app import config
from app.infra.supabase.repositories import RepositoryFactory
from app.models.thought import Thought, ThoughtCreate, ThoughtPage, ThoughtUpdate
from app.services import errors
from app.services.errors import ThoughtServiceError, ThoughtValidationError
from app.utils.date_utils import parse_date, sort_dates_desc
from app.utils.thought_utils import process_thoughts

logger = logging.getLogger(__name__)


def _validate_content(content: str) -> None:
    if not content or not content.strip():
        raise ThoughtValidationError("Thought content must not be empty")


def _validate_date(date: str) -> None:
    try:
        parse_date(date)
    except (TypeError, ValueError):
        raise ThoughtValidationError(f"Invalid date '{date}', expected YYYY-MM-DD") from None


class ThoughtService:
    """
    The only component that talks to the thoughts table.

    Pages are made of whole dates rather than a fixed number of rows, so a
    date is never split across two loads. Every remote failure is logged and
    replaced with a ThoughtServiceError carrying a fixed message.
    """

    def __init__(
        self,
        repositories: RepositoryFactory,
        days_per_load: int = config.DAYS_PER_LOAD,
        date_probe_limit: int = config.DATE_PROBE_LIMIT,
    ):
        self._repositories = repositories
        self.days_per_load = days_per_load
        self.date_probe_limit = date_probe_limit

    @property
    def _thoughts(self):
        return self._repositories.thoughts

    async def _load_page(self, user_id: str, before: Optional[str]) -> Tuple[Optional[ThoughtPage], int]:
        """
        Load the next `days_per_load` distinct dates older than `before`.

        Returns the page (None when there is nothing to load) and the number
        of distinct dates the probe found. The page's has_more counts probed
        dates beyond this page.

        The probe reads at most `date_probe_limit` rows, so a busy date can
        fill it and hide every older date. A full probe therefore always
        reports has_more; the next load starts before the oldest date taken.
        """
        recent_dates = await self._thoughts.find_recent_dates(
            user_id, before=before, limit=self.date_probe_limit
        )
        if not recent_dates:
            return None, 0

        unique_dates = sort_dates_desc(set(recent_dates))
        dates_to_load = unique_dates[:self.days_per_load]

        rows = await self._thoughts.find_by_dates(user_id, dates_to_load)
        logger.info(
            f"Loaded {len(rows)} thoughts across {len(dates_to_load)} dates "
            f"for user {user_id} (before={before})"
        )

        page = ThoughtPage(
            thoughts=process_thoughts(rows),
            has_more=(
                len(unique_dates) > len(dates_to_load)
                or len(recent_dates) >= self.date_probe_limit
            ),
            last_loaded_date=dates_to_load[-1],
            row_count=len(rows),
        )
        return page, len(unique_dates)

    async def load_initial_thoughts(self, user_id: str) -> ThoughtPage:
        """Load the most recent page of a user's thoughts"""
        logger.info(f"Loading initial thoughts for user: {user_id}")
        try:
            page, _ = await self._load_page(user_id, before=None)
        except Exception as e:
            logger.error(f"Load initial thoughts error: {e}", exc_info=True)
            raise ThoughtServiceError(errors.LOAD_THOUGHTS_FAILED) from None

        return page or ThoughtPage()

    async def load_more_thoughts(self, user_id: str, last_loaded_date: str) -> ThoughtPage:
        """
        Load the page of dates strictly older than last_loaded_date.

        has_more is True whenever a full page of dates was found, so it can be
        a false positive; the following call then comes back empty.
        """
        try:
            page, dates_found = await self._load_page(user_id, before=last_loaded_date)
        except Exception as e:
            logger.error(f"Load more thoughts error: {e}", exc_info=True)
            raise ThoughtServiceError(errors.LOAD_THOUGHTS_FAILED) from None

        if page is None or page.row_count == 0:
            return ThoughtPage()

        page.has_more = page.has_more or dates_found >= self.days_per_load
        return page

    async def add_thought(
        self,
        user_id: str,
        content: str,
        date: str,
        hidden: bool = False,
    ) -> Thought:
        """
        Insert a thought and return it with its server-assigned fields

        Raises:
            ThoughtValidationError: content is blank or date is malformed
            ThoughtServiceError: the insert failed
        """
        _validate_content(content)
        _validate_date(date)

        try:
            return await self._thoughts.create(
                ThoughtCreate(user_id=user_id, content=content, date=date, hidden=hidden)
            )
        except Exception as e:
            logger.error(f"Add thought error: {e}", exc_info=True)
            raise ThoughtServiceError(errors.ADD_THOUGHT_FAILED) from None

    async def update_thought(self, user_id: str, id: str, content: str) -> Thought:
        """Replace a thought's content; fails if the user owns no such thought"""
        _validate_content(content)

        try:
            updated = await self._thoughts.update_for_user(
                id,
                user_id,
                ThoughtUpdate(content=content, updated_at=datetime.now(timezone.utc)),
            )
            if updated is None:
                raise LookupError(f"No thought {id} for user {user_id}")
            return updated
        except Exception as e:
            logger.error(f"Update thought error: {e}", exc_info=True)
            raise ThoughtServiceError(errors.UPDATE_THOUGHT_FAILED) from None

    async def delete_thought(self, user_id: str, id: str) -> None:
        try:
            deleted = await self._thoughts.delete_for_user(id, user_id)
            if not deleted:
                raise LookupError(f"No thought {id} for user {user_id}")
        except Exception as e:
            logger.error(f"Delete thought error: {e}", exc_info=True)
            raise ThoughtServiceError(errors.DELETE_THOUGHT_FAILED) from None

    async def toggle_thought_hidden(self, user_id: str, id: str, current_hidden: bool) -> Thought:
        """Write the negation of current_hidden; returns the updated row"""
        try:
            updated = await self._thoughts.update_for_user(
                id,
                user_id,
                ThoughtUpdate(hidden=not current_hidden, updated_at=datetime.now(timezone.utc)),
            )
            if updated is None:
                raise LookupError(f"No thought {id} for user {user_id}")
            return updated
        except Exception as e:
            logger.error(f"Toggle thought hidden error: {e}", exc_info=True)
            raise ThoughtServiceError(errors.TOGGLE_HIDDEN_FAILED) from None
