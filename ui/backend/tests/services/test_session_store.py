"""Tests for the in-memory session store."""

from dreamcolor.coloring import WorkflowStep

from app.services.session_store import SessionStore


class TestSessionStore:

    def test_create_registers_fresh_session(self):
        store = SessionStore()

        book = store.create()

        assert store.get(book.id) is book
        assert book.generation.current_step == WorkflowStep.INPUT
        assert book.conversation.messages == []
        assert store.session_count == 1

    def test_ids_are_unique(self):
        store = SessionStore()

        ids = {store.create().id for _ in range(10)}

        assert len(ids) == 10

    def test_get_unknown_returns_none(self):
        assert SessionStore().get("missing") is None

    def test_delete(self):
        store = SessionStore()
        book = store.create()

        store.delete(book.id)
        store.delete(book.id)

        assert store.get(book.id) is None


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestSessionEviction:

    def test_oldest_session_dropped_over_limit(self):
        store = SessionStore(max_sessions=2, ttl_seconds=None)
        first = store.create()
        second = store.create()

        third = store.create()

        assert store.get(first.id) is None
        assert store.get(second.id) is second
        assert store.get(third.id) is third
        assert store.session_count == 2

    def test_recent_use_protects_session(self):
        store = SessionStore(max_sessions=2, ttl_seconds=None)
        first = store.create()
        second = store.create()
        store.get(first.id)

        store.create()

        assert store.get(first.id) is first
        assert store.get(second.id) is None

    def test_generating_session_is_kept(self):
        store = SessionStore(max_sessions=1, ttl_seconds=None)
        busy = store.create()
        busy.generation.begin("Cats")

        fresh = store.create()

        assert store.get(busy.id) is busy
        assert store.get(fresh.id) is fresh

    def test_idle_session_expires(self):
        clock = FakeClock()
        store = SessionStore(ttl_seconds=60, clock=clock)
        book = store.create()

        clock.now = 61

        assert store.get(book.id) is None
        assert store.session_count == 0

    def test_access_refreshes_ttl(self):
        clock = FakeClock()
        store = SessionStore(ttl_seconds=60, clock=clock)
        book = store.create()

        clock.now = 50
        store.get(book.id)
        clock.now = 100

        assert store.get(book.id) is book

    def test_create_sweeps_expired_sessions(self):
        clock = FakeClock()
        store = SessionStore(ttl_seconds=60, clock=clock)
        store.create()
        store.create()

        clock.now = 120
        store.create()

        assert store.session_count == 1
