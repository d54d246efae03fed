from turnover.config import load_config
from turnover.snapshot import DerivationCache, Snapshot, SnapshotStore
from turnover.types import Property, Reservation


def test_store_replace_bumps_version_and_keeps_omitted_collections():
    store = SnapshotStore()
    first = store.replace(properties=[Property(id="p1", name="Casa")])
    second = store.replace(reservations=[Reservation(id="r1", property_id="p1")])

    assert (first.version, second.version) == (1, 2)
    assert second.properties == first.properties
    assert len(second.reservations) == 1
    assert store.current() is second
    # earlier snapshot references are untouched
    assert first.reservations == ()


def test_snapshot_indexes_are_built_once():
    snap = Snapshot(reservations=(Reservation(id="r1", property_id="p1", check_in="2024-06-10"),))

    assert snap.reservation_index is snap.reservation_index
    assert snap.reservation_index.first_arrival("p1", "2024-06-10").id == "r1"


def test_cache_hits_same_version_and_recomputes_after_replace():
    store = SnapshotStore()
    cache = DerivationCache(max_entries=8)
    calls = []

    def compute():
        calls.append(1)
        return ["result", len(calls)]

    snap = store.current()
    first = cache.get_or_compute(snap, ("critical-days", "2024-06-01"), compute)
    again = cache.get_or_compute(snap, ("critical-days", "2024-06-01"), compute)
    assert first is again
    assert len(calls) == 1

    cache.get_or_compute(snap, ("critical-days", "2024-06-02"), compute)
    assert len(calls) == 2

    newer = store.replace(reservations=[])
    cache.get_or_compute(newer, ("critical-days", "2024-06-01"), compute)
    assert len(calls) == 3


def test_cache_is_bounded():
    cache = DerivationCache(max_entries=2)
    snap = Snapshot()
    for n in range(5):
        cache.get_or_compute(snap, n, lambda: n)

    assert len(cache) == 2
    cache.clear()
    assert len(cache) == 0


def test_cache_size_defaults_to_config(monkeypatch):
    monkeypatch.setenv("TURNOVER_CACHE_SIZE", "5")
    load_config(refresh=True)
    try:
        assert DerivationCache().max_entries == 5
    finally:
        monkeypatch.delenv("TURNOVER_CACHE_SIZE")
        load_config(refresh=True)
