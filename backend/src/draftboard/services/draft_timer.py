"""Background turn timer for a draft session."""

import asyncio
import logging
import threading
from typing import Optional

from draftboard.services.draft_session import DraftSession

logger = logging.getLogger(__name__)


class DraftTimer:
    """Ticks a session once per ``period`` while its timer is running.

    The task exits on its own when the timer is toggled off or the draft
    completes; ``start`` again after toggling back on.
    """

    def __init__(
        self,
        session: DraftSession,
        period: float = 1.0,
        lock: Optional[threading.Lock] = None,
    ):
        self.session = session
        self.period = period
        self.lock = lock or threading.Lock()
        self.task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self.task is not None and not self.task.done()

    def start(self) -> None:
        """Start ticking in the running event loop (no-op if already running)."""
        if self.running:
            return
        self.task = asyncio.create_task(self._run())
        logger.debug(f"Timer started for session {self.session.session_id}")

    def stop(self) -> None:
        """Cancel the background task."""
        if self.task and not self.task.done():
            self.task.cancel()
            logger.debug(f"Timer stopped for session {self.session.session_id}")
        self.task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.period)
            with self.lock:
                state = self.session.state
                if not state.is_timer_running or state.is_complete:
                    return
                self.session.tick()
