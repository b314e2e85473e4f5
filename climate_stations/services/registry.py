from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import Protocol

from climate_stations.models.station import Station, StationCoverage
from climate_stations.parsing.fixed_width import parse_inventory_line, parse_station_line

logger = logging.getLogger(__name__)


class RegistrySource(Protocol):
    def station_lines(self) -> Iterable[str]: ...

    def inventory_lines(self) -> Iterable[str]: ...


class StationRegistry:
    """Station catalog plus per-station temperature coverage.

    Built once at startup and read-only afterwards, so readers need no lock.
    Each load replaces the previous state in full.
    """

    def __init__(
        self,
        stations: Iterable[Station] = (),
        coverage: dict[str, StationCoverage] | None = None,
    ) -> None:
        self._stations: tuple[Station, ...] = tuple(stations)
        self._by_id: dict[str, Station] = {s.id: s for s in self._stations}
        self._coverage: dict[str, StationCoverage] = dict(coverage or {})

    @classmethod
    def load_from(cls, source: RegistrySource) -> StationRegistry:
        registry = cls()
        registry.load(source)
        return registry

    def load(self, source: RegistrySource) -> None:
        started = time.monotonic()
        self.load_coverage(source.inventory_lines())
        self.load_stations(source.station_lines())
        logger.info(
            "Station registry loaded: %d stations, %d with temperature coverage (%.1fs)",
            len(self._stations),
            len(self._coverage),
            time.monotonic() - started,
        )

    def load_stations(self, lines: Iterable[str]) -> None:
        stations: list[Station] = []
        for line in lines:
            station = parse_station_line(line)
            if station is not None:
                stations.append(station)
        self._stations = tuple(stations)
        self._by_id = {s.id: s for s in stations}

    def load_coverage(self, lines: Iterable[str]) -> None:
        coverage: dict[str, StationCoverage] = {}
        for line in lines:
            record = parse_inventory_line(line)
            if record is None:
                continue
            existing = coverage.get(record.station_id)
            if existing is None:
                coverage[record.station_id] = record.coverage
            else:
                coverage[record.station_id] = existing.merge(record.coverage)
        self._coverage = coverage

    @property
    def stations(self) -> tuple[Station, ...]:
        return self._stations

    @property
    def coverage_count(self) -> int:
        return len(self._coverage)

    def get(self, station_id: str) -> Station | None:
        return self._by_id.get(station_id)

    def coverage_for(self, station_id: str) -> StationCoverage | None:
        return self._coverage.get(station_id)

    def __len__(self) -> int:
        return len(self._stations)
