"""Tests for session storage and the background turn timer."""

import asyncio
import time

import pytest

from draftboard.services.draft_timer import DraftTimer
from draftboard.services.session_store import DraftSessionStore, SessionNotFoundError


@pytest.fixture
def store(small_catalog):
    return DraftSessionStore(small_catalog, ttl_seconds=60, cleanup_interval_seconds=0)


class TestDraftSessionStore:
    def test_create_and_get(self, store):
        stored = store.create()
        session_id = stored.session.session_id
        assert session_id.startswith("draft_")
        assert store.get(session_id) is stored
        assert len(store) == 1

    def test_unknown_session(self, store):
        with pytest.raises(SessionNotFoundError):
            store.get("draft_missing")

    def test_delete(self, store):
        session_id = store.create().session.session_id
        assert store.delete(session_id) is True
        assert store.delete(session_id) is False
        with pytest.raises(SessionNotFoundError):
            store.get(session_id)

    def test_prune_expired(self, store):
        stale = store.create()
        fresh = store.create()
        stale.session.last_access = time.time() - 120

        removed = store.prune_expired(force=True)

        assert removed == [stale.session.session_id]
        assert store.get(fresh.session.session_id) is fresh

    def test_locked_sessions_survive_pruning(self, store):
        stored = store.create()
        stored.session.last_access = time.time() - 120
        with stored.lock:
            assert store.prune_expired(force=True) == []
        assert len(store) == 1

    def test_get_refreshes_last_access(self, store):
        stored = store.create()
        stored.session.last_access = time.time() - 30
        store.get(stored.session.session_id)
        assert time.time() - stored.session.last_access < 5

    def test_cleanup_interval_throttles_pruning(self, small_catalog):
        store = DraftSessionStore(small_catalog, ttl_seconds=60, cleanup_interval_seconds=3600)
        stored = store.create()  # runs the first cleanup
        stored.session.last_access = time.time() - 120
        assert store.prune_expired() == []
        assert store.prune_expired(force=True) == [stored.session.session_id]


class TestDraftTimer:
    @pytest.mark.anyio
    async def test_ticks_while_running(self, store):
        stored = store.create()
        timer = DraftTimer(stored.session, period=0.01, lock=stored.lock)
        stored.session.toggle_timer()
        timer.start()
        await asyncio.sleep(0.1)
        timer.stop()

        assert stored.session.state.timer < 30
        assert timer.running is False

    @pytest.mark.anyio
    async def test_exits_when_paused(self, store):
        stored = store.create()
        timer = DraftTimer(stored.session, period=0.01)
        timer.start()  # timer flag is off
        await asyncio.sleep(0.05)
        assert timer.running is False
        assert stored.session.state.timer == 30

    @pytest.mark.anyio
    async def test_start_is_idempotent(self, store):
        stored = store.create()
        stored.session.toggle_timer()
        stored.timer.start()
        task = stored.timer.task
        stored.timer.start()
        assert stored.timer.task is task
        store.close()
        assert len(store) == 0
