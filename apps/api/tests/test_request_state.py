"""
Tests for the keyed request-state store and auto refresh.
"""
import json

from backoffice.client import MENU, ORDERS, RESERVATIONS, AutoRefresher, RequestStateStore


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestShouldFetch:

    def test_first_caller_wins(self):
        """should_fetch returns True once, then False."""
        store = RequestStateStore()

        assert store.should_fetch(MENU) is True
        assert store.should_fetch(MENU) is False
        assert store.should_fetch(MENU) is False

    def test_keys_are_independent(self):
        store = RequestStateStore()

        assert store.should_fetch(MENU) is True
        assert store.should_fetch(ORDERS) is True
        assert store.should_fetch(RESERVATIONS) is True
        assert store.should_fetch(ORDERS) is False

    def test_invalidate_allows_next_fetch(self):
        store = RequestStateStore()
        store.should_fetch(ORDERS)

        store.invalidate(ORDERS)

        assert store.is_fetched(ORDERS) is False
        assert store.should_fetch(ORDERS) is True
        assert store.should_fetch(ORDERS) is False

    def test_reset_clears_everything(self):
        store = RequestStateStore()
        store.should_fetch(MENU)
        store.should_fetch(ORDERS)

        store.reset()

        assert store.snapshot() == {}
        assert store.should_fetch(MENU) is True

    def test_max_age_window(self):
        """With a 10 second window the key becomes fetchable again once it ends."""
        clock = FakeClock()
        store = RequestStateStore(max_age=10, clock=clock)

        assert store.should_fetch(MENU) is True
        clock.advance(9.9)
        assert store.should_fetch(MENU) is False
        clock.advance(0.1)
        assert store.should_fetch(MENU) is True


class TestPersistence:

    def test_state_survives_new_instance(self, tmp_path):
        """A second store on the same file sees what the first one fetched."""
        path = tmp_path / "request-state.json"
        RequestStateStore(persist_path=path).should_fetch(MENU)

        store = RequestStateStore(persist_path=path)

        assert store.should_fetch(MENU) is False
        assert store.should_fetch(ORDERS) is True

    def test_reset_is_persisted(self, tmp_path):
        path = tmp_path / "request-state.json"
        first = RequestStateStore(persist_path=path)
        first.should_fetch(MENU)
        first.reset()

        assert json.loads(path.read_text()) == {"fetched": {}}
        assert RequestStateStore(persist_path=path).should_fetch(MENU) is True

    def test_corrupt_file_ignored(self, tmp_path):
        path = tmp_path / "request-state.json"
        path.write_text("{not json")

        store = RequestStateStore(persist_path=path)

        assert store.should_fetch(MENU) is True


class TestAutoRefresher:

    def test_invalidates_due_keys(self):
        clock = FakeClock()
        store = RequestStateStore()
        refresher = AutoRefresher(store, clock=clock)
        for key in (MENU, ORDERS, RESERVATIONS):
            store.should_fetch(key)

        clock.advance(60)
        due = refresher.tick()

        assert sorted(due) == [MENU, RESERVATIONS]
        assert store.should_fetch(MENU) is True
        assert store.should_fetch(ORDERS) is False

        clock.advance(240)
        assert ORDERS in refresher.tick()
        assert store.should_fetch(ORDERS) is True

    def test_nothing_due(self):
        clock = FakeClock()
        refresher = AutoRefresher(RequestStateStore(), intervals={MENU: 5}, clock=clock)

        clock.advance(4)

        assert refresher.tick() == []
