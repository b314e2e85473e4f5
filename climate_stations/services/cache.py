from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol

from climate_stations.models.observation import RawObservation

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60


class ReadWriteLock:
    """Many concurrent readers or one exclusive writer.

    Waiting writers block new readers so a steady read load cannot starve
    them.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class StationLoader(Protocol):
    def load(self, station_id: str) -> list[RawObservation]: ...


@dataclass(frozen=True)
class CacheEntry:
    observations: list[RawObservation]
    fetched_at: float


class StationDataCache:
    """Per-station observation cache with a time-to-live.

    Stale entries are replaced lazily on the next ``get``. The upstream fetch
    runs outside the lock, so two concurrent misses for one station may both
    fetch; the later write wins and both callers get correct data.

    ``max_entries`` of 0 leaves the cache unbounded. Otherwise inserting past
    the bound evicts the entries with the oldest fetch time.
    """

    def __init__(
        self,
        loader: StationLoader,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loader = loader
        self._ttl_seconds = float(ttl_seconds)
        self._max_entries = max(int(max_entries), 0)
        self._clock = clock
        self._lock = ReadWriteLock()
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self, station_id: str) -> list[RawObservation]:
        with self._lock.read():
            entry = self._entries.get(station_id)

        if entry is not None and self._clock() - entry.fetched_at < self._ttl_seconds:
            logger.debug("Cache hit for %s", station_id)
            return entry.observations

        logger.info("Fetching observations for %s", station_id)
        observations = self._loader.load(station_id)

        with self._lock.write():
            self._entries[station_id] = CacheEntry(
                observations=observations, fetched_at=self._clock()
            )
            self._evict_locked()
        return observations

    def _evict_locked(self) -> None:
        if not self._max_entries or len(self._entries) <= self._max_entries:
            return
        excess = len(self._entries) - self._max_entries
        oldest = sorted(self._entries.items(), key=lambda item: item[1].fetched_at)[:excess]
        for station_id, _ in oldest:
            del self._entries[station_id]

    def clear(self) -> None:
        with self._lock.write():
            self._entries.clear()

    def __contains__(self, station_id: object) -> bool:
        with self._lock.read():
            return station_id in self._entries

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)
