from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from climate_stations.core.config import Settings
from climate_stations.services.cache import StationDataCache
from climate_stations.services.registry import StationRegistry
from climate_stations.services.search import StationSearchService
from climate_stations.services.stations import StationDetailService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> StationRegistry:
    return request.app.state.registry


def get_station_cache(request: Request) -> StationDataCache:
    return request.app.state.station_cache


def get_search_service(
    registry: Annotated[StationRegistry, Depends(get_registry)],
) -> StationSearchService:
    return StationSearchService(registry)


def get_station_detail_service(
    cache: Annotated[StationDataCache, Depends(get_station_cache)],
) -> StationDetailService:
    return StationDetailService(cache)
