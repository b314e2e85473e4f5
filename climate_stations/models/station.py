from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    id: str
    name: str
    latitude: float | None = None
    longitude: float | None = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class StationCoverage:
    first_year: int
    last_year: int

    def merge(self, other: StationCoverage) -> StationCoverage:
        return StationCoverage(
            first_year=min(self.first_year, other.first_year),
            last_year=max(self.last_year, other.last_year),
        )

    def spans(self, start_year: int, end_year: int) -> bool:
        return self.first_year <= start_year and self.last_year >= end_year


@dataclass(frozen=True)
class InventoryRecord:
    station_id: str
    element: str
    first_year: int
    last_year: int

    @property
    def coverage(self) -> StationCoverage:
        return StationCoverage(first_year=self.first_year, last_year=self.last_year)


@dataclass(frozen=True)
class StationMatch:
    """A registry station paired with its distance from a search point."""

    id: str
    name: str
    latitude: float | None
    longitude: float | None
    distance: float

    @classmethod
    def from_station(cls, station: Station, distance: float) -> StationMatch:
        return cls(
            id=station.id,
            name=station.name,
            latitude=station.latitude,
            longitude=station.longitude,
            distance=distance,
        )
