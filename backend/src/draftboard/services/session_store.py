"""In-memory draft session storage with per-session locks and TTL pruning."""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Literal, Optional

from draftboard.repositories.champion_repository import ChampionCatalog
from draftboard.services.draft_session import DraftSession
from draftboard.services.draft_timer import DraftTimer

logger = logging.getLogger(__name__)

SESSION_TTL_SECONDS = 60 * 60
SESSION_CLEANUP_INTERVAL_SECONDS = 60


class SessionNotFoundError(KeyError):
    """No live session with the given id."""


@dataclass
class StoredSession:
    session: DraftSession
    lock: threading.Lock = field(default_factory=threading.Lock)
    timer: Optional[DraftTimer] = None

    def __post_init__(self):
        if self.timer is None:
            self.timer = DraftTimer(self.session, lock=self.lock)


class DraftSessionStore:
    """Thread-safe map of session id to draft session.

    Sessions idle for ``ttl_seconds`` are pruned opportunistically, at most
    once per ``cleanup_interval_seconds``. A session whose lock is held is
    never pruned.
    """

    def __init__(
        self,
        catalog: ChampionCatalog,
        profile: Literal["full", "compact"] = "full",
        ttl_seconds: float = SESSION_TTL_SECONDS,
        cleanup_interval_seconds: float = SESSION_CLEANUP_INTERVAL_SECONDS,
    ):
        self.catalog = catalog
        self.profile = profile
        self.ttl_seconds = ttl_seconds
        self.cleanup_interval_seconds = cleanup_interval_seconds
        self._sessions: dict[str, StoredSession] = {}
        self._sessions_lock = threading.Lock()
        self._cleanup_lock = threading.Lock()
        self._last_cleanup = 0.0

    def __len__(self) -> int:
        return len(self._sessions)

    def is_expired(self, session: DraftSession, now: float) -> bool:
        return (now - session.last_access) >= self.ttl_seconds

    def create(self) -> StoredSession:
        self.prune_expired()
        stored = StoredSession(DraftSession(self.catalog, profile=self.profile))
        with self._sessions_lock:
            self._sessions[stored.session.session_id] = stored
        logger.info(f"Created draft session {stored.session.session_id}")
        return stored

    def get(self, session_id: str) -> StoredSession:
        """Fetch a live session and mark it as accessed.

        Raises:
            SessionNotFoundError: If the id is unknown or the session expired.
        """
        self.prune_expired()
        now = time.time()
        with self._sessions_lock:
            stored = self._sessions.get(session_id)
        if stored is None or self.is_expired(stored.session, now):
            raise SessionNotFoundError(session_id)
        stored.session.last_access = now
        return stored

    def delete(self, session_id: str) -> bool:
        with self._sessions_lock:
            stored = self._sessions.pop(session_id, None)
        if stored is None:
            return False
        stored.timer.stop()
        logger.info(f"Ended draft session {session_id}")
        return True

    def prune_expired(self, now: Optional[float] = None, force: bool = False) -> list[str]:
        """Remove expired sessions; returns the removed ids."""
        now = now or time.time()
        if not force and now - self._last_cleanup < self.cleanup_interval_seconds:
            return []

        with self._cleanup_lock:
            if not force and now - self._last_cleanup < self.cleanup_interval_seconds:
                return []

            expired: list[str] = []
            with self._sessions_lock:
                for session_id, stored in self._sessions.items():
                    if stored.lock.locked():
                        continue
                    if self.is_expired(stored.session, now):
                        expired.append(session_id)

                for session_id in expired:
                    stored = self._sessions.pop(session_id)
                    stored.timer.stop()

            self._last_cleanup = now

        if expired:
            logger.info(f"Pruned {len(expired)} expired draft sessions")
        return expired

    def close(self) -> None:
        """Stop every timer and drop all sessions."""
        with self._sessions_lock:
            for stored in self._sessions.values():
                stored.timer.stop()
            self._sessions.clear()
