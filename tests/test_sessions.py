import pytest

from foodie.services.sessions import SessionStore


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def test_same_id_returns_same_session(clock):
    store = SessionStore(idle_seconds=60, max_active=10, clock=clock)
    session = store.get_or_create(None)

    assert store.get_or_create(session.id) is session
    assert len(store) == 1


def test_unknown_id_gets_fresh_session(clock):
    store = SessionStore(idle_seconds=60, max_active=10, clock=clock)

    session = store.get_or_create("forged-cookie")

    assert session.id != "forged-cookie"


def test_get_never_creates(clock):
    store = SessionStore(idle_seconds=60, max_active=10, clock=clock)

    assert store.get(None) is None
    assert store.get("unknown") is None
    assert len(store) == 0


def test_idle_sessions_are_evicted(clock):
    store = SessionStore(idle_seconds=60, max_active=10, clock=clock)
    stale = store.get_or_create(None)
    clock.advance(30)
    fresh = store.get_or_create(None)

    clock.advance(45)

    assert store.get(stale.id) is None
    assert store.get(fresh.id) is fresh
    assert len(store) == 1


def test_access_extends_lifetime(clock):
    store = SessionStore(idle_seconds=60, max_active=10, clock=clock)
    session = store.get_or_create(None)

    for _ in range(5):
        clock.advance(50)
        assert store.get(session.id) is session


def test_limit_drops_least_recently_used(clock):
    store = SessionStore(idle_seconds=3600, max_active=3, clock=clock)
    first, second, third = (store.get_or_create(None) for _ in range(3))
    store.get(first.id)

    fourth = store.get_or_create(None)

    assert len(store) == 3
    assert store.get(second.id) is None
    assert all(store.get(s.id) is s for s in (first, third, fourth))


def test_new_sessions_start_empty(clock):
    session = SessionStore(idle_seconds=60, max_active=10, clock=clock).get_or_create(None)

    assert session.cart.is_empty
    assert session.menu == {}
    assert session.qr is None
