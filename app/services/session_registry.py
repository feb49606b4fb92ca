"""Per-user thought stores, created on sign-in and dropped on sign-out or expiry"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from app import config
from app.services.thought_service import ThoughtService
from app.services.thought_store import ThoughtStore

logger = logging.getLogger(__name__)


@dataclass
class Session:
    store: ThoughtStore
    last_seen: float


class SessionRegistry:
    """
    Owns one ThoughtStore per signed-in user.

    A session ends on sign-out, or once it has not been used for
    ``idle_timeout`` seconds. Expired sessions are swept on every sign-in
    and lookup, and their stores are reset so late results are dropped.
    """

    def __init__(
        self,
        service: ThoughtService,
        idle_timeout: float = config.SESSION_IDLE_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._service = service
        self._idle_timeout = idle_timeout
        self._clock = clock
        self._sessions: Dict[str, Session] = {}

    def evict_expired(self) -> int:
        """Discard idle sessions; returns how many were dropped"""
        now = self._clock()
        expired = [
            user_id for user_id, session in self._sessions.items()
            if now - session.last_seen > self._idle_timeout
        ]
        for user_id in expired:
            self._sessions.pop(user_id).store.reset()
            logger.info(f"Session expired for user {user_id}")
        return len(expired)

    def sign_in(self, user_id: str) -> ThoughtStore:
        """Return the user's store, creating it on first sign-in"""
        self.evict_expired()
        session = self._sessions.get(user_id)
        if session is None:
            session = Session(store=ThoughtStore(self._service, user_id), last_seen=self._clock())
            self._sessions[user_id] = session
            logger.info(f"Session started for user {user_id}")
        else:
            session.last_seen = self._clock()
        return session.store

    def get(self, user_id: str) -> Optional[ThoughtStore]:
        """The user's live store, refreshing its idle timer; None if there is none"""
        self.evict_expired()
        session = self._sessions.get(user_id)
        if session is None:
            return None
        session.last_seen = self._clock()
        return session.store

    def sign_out(self, user_id: str) -> bool:
        """Reset and discard the user's store; False if there was none"""
        session = self._sessions.pop(user_id, None)
        if session is None:
            return False
        session.store.reset()
        logger.info(f"Session ended for user {user_id}")
        return True

    def __len__(self) -> int:
        return len(self._sessions)
