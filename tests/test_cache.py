from __future__ import annotations

import threading
from datetime import date

import pytest

from climate_stations.core.errors import UpstreamStatusError
from climate_stations.models.observation import Element, RawObservation
from climate_stations.services.cache import ReadWriteLock, StationDataCache
from tests.fakes import CountingLoader, FakeClock

OBSERVATIONS = [RawObservation(date(2020, 1, 1), Element.TMIN, 100)]


def test_first_access_fetches_once_and_then_hits() -> None:
    loader = CountingLoader(OBSERVATIONS)
    clock = FakeClock()
    cache = StationDataCache(loader, ttl_seconds=3600, clock=clock)

    assert cache.get("GM000003342") == OBSERVATIONS
    assert loader.calls["GM000003342"] == 1

    clock.advance(3599)
    assert cache.get("GM000003342") == OBSERVATIONS
    assert loader.calls["GM000003342"] == 1


def test_stale_entry_is_refetched() -> None:
    loader = CountingLoader(OBSERVATIONS)
    clock = FakeClock()
    cache = StationDataCache(loader, ttl_seconds=3600, clock=clock)

    cache.get("GM000003342")
    clock.advance(3600)
    cache.get("GM000003342")
    assert loader.calls["GM000003342"] == 2

    cache.get("GM000003342")
    assert loader.calls["GM000003342"] == 2
    assert len(cache) == 1


def test_entries_are_per_station() -> None:
    loader = CountingLoader(OBSERVATIONS)
    cache = StationDataCache(loader, clock=FakeClock())
    cache.get("A")
    cache.get("B")
    cache.get("A")
    assert loader.calls == {"A": 1, "B": 1}
    assert "A" in cache and "B" in cache


def test_failed_fetch_is_not_cached() -> None:
    class FailingLoader:
        calls = 0

        def load(self, station_id: str):
            self.calls += 1
            raise UpstreamStatusError("Station X not found (status 404)", url="u", status_code=404)

    loader = FailingLoader()
    cache = StationDataCache(loader, clock=FakeClock())
    with pytest.raises(UpstreamStatusError):
        cache.get("X")
    with pytest.raises(UpstreamStatusError):
        cache.get("X")
    assert loader.calls == 2
    assert len(cache) == 0


def test_max_entries_evicts_oldest_fetch() -> None:
    loader = CountingLoader(OBSERVATIONS)
    clock = FakeClock()
    cache = StationDataCache(loader, max_entries=2, clock=clock)

    for station_id in ("A", "B", "C"):
        cache.get(station_id)
        clock.advance(1)

    assert len(cache) == 2
    assert "A" not in cache
    cache.get("A")
    assert loader.calls["A"] == 2


def test_clear() -> None:
    cache = StationDataCache(CountingLoader(OBSERVATIONS), clock=FakeClock())
    cache.get("A")
    cache.clear()
    assert len(cache) == 0


def test_concurrent_gets_return_correct_data() -> None:
    loader = CountingLoader(OBSERVATIONS)
    cache = StationDataCache(loader)
    results: list[list[RawObservation]] = []
    lock = threading.Lock()

    def worker() -> None:
        data = cache.get("GM000003342")
        with lock:
            results.append(data)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert len(results) == 16
    assert all(r == OBSERVATIONS for r in results)
    assert 1 <= loader.calls["GM000003342"] <= 16
    assert len(cache) == 1


def test_read_write_lock_excludes_writer_while_reading() -> None:
    rw = ReadWriteLock()
    writer_done = threading.Event()

    def writer() -> None:
        with rw.write():
            writer_done.set()

    with rw.read():
        with rw.read():
            t = threading.Thread(target=writer)
            t.start()
            assert not writer_done.wait(0.05)
    t.join(timeout=5)
    assert writer_done.is_set()
