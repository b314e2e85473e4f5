from __future__ import annotations

from climate_stations.models.observation import StationDetail
from climate_stations.services.aggregation import annual_averages, seasonal_averages
from climate_stations.services.cache import StationDataCache


class StationDetailService:
    def __init__(self, cache: StationDataCache) -> None:
        self._cache = cache

    def detail(self, station_id: str) -> StationDetail:
        observations = self._cache.get(station_id)
        return StationDetail(
            station_id=station_id,
            annual=annual_averages(observations),
            seasonal=seasonal_averages(observations),
        )
