from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from climate_stations.models.station import StationMatch
from climate_stations.services.registry import StationRegistry

EARTH_RADIUS_KM = 6371.0


class SearchErrorCode(str, Enum):
    NO_STATIONS_IN_RADIUS = "no_stations_in_radius"
    NO_DATA_IN_RANGE = "no_data_in_range"


@dataclass(frozen=True)
class SearchResult:
    stations: list[StationMatch]
    error_code: SearchErrorCode | None = None
    stations_in_radius: int | None = None


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two lat/lon points."""
    d_lat = math.radians(lat1 - lat2)
    d_lon = math.radians(lon1 - lon2)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    a = min(a, 1.0)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def find_stations(
    registry: StationRegistry,
    *,
    lat: float,
    lon: float,
    radius_km: int,
    limit: int,
    start_year: int,
    end_year: int,
) -> list[StationMatch]:
    """Stations within ``radius_km`` whose coverage spans the whole year range.

    Sorted by distance ascending; ties keep registry order. A ``limit`` of
    zero or less returns every match.
    """
    matches: list[StationMatch] = []
    for station in registry.stations:
        if not station.has_coordinates:
            continue
        distance = haversine_km(lat, lon, station.latitude, station.longitude)
        if distance > radius_km:
            continue
        coverage = registry.coverage_for(station.id)
        if coverage is None or not coverage.spans(start_year, end_year):
            continue
        matches.append(StationMatch.from_station(station, distance))

    matches.sort(key=lambda m: m.distance)
    return matches[:limit] if limit > 0 else matches


def count_in_radius(registry: StationRegistry, *, lat: float, lon: float, radius_km: int) -> int:
    count = 0
    for station in registry.stations:
        if not station.has_coordinates:
            continue
        if haversine_km(lat, lon, station.latitude, station.longitude) <= radius_km:
            count += 1
    return count


class StationSearchService:
    def __init__(self, registry: StationRegistry) -> None:
        self._registry = registry

    def search(
        self,
        *,
        lat: float,
        lon: float,
        radius_km: int,
        limit: int,
        start_year: int,
        end_year: int,
    ) -> SearchResult:
        stations = find_stations(
            self._registry,
            lat=lat,
            lon=lon,
            radius_km=radius_km,
            limit=limit,
            start_year=start_year,
            end_year=end_year,
        )
        if stations:
            return SearchResult(stations=stations)

        nearby = count_in_radius(self._registry, lat=lat, lon=lon, radius_km=radius_km)
        code = (
            SearchErrorCode.NO_DATA_IN_RANGE if nearby > 0 else SearchErrorCode.NO_STATIONS_IN_RADIUS
        )
        return SearchResult(stations=[], error_code=code, stations_in_radius=nearby)
