from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from climate_stations.api.deps import get_search_service, get_station_detail_service
from climate_stations.api.errors import error_response
from climate_stations.core.errors import UpstreamError, UpstreamStatusError
from climate_stations.schemas.stations import (
    AnnualOut,
    SeasonalOut,
    StationDetailOut,
    StationDetailResponse,
    StationOut,
    StationsResponse,
)
from climate_stations.services.search import SearchErrorCode, SearchResult, StationSearchService
from climate_stations.services.stations import StationDetailService

logger = logging.getLogger(__name__)

router = APIRouter()

STATION_ID_PATTERN = r"^[A-Za-z0-9]{1,32}$"


def describe_search_error(result: SearchResult, *, start: int, end: int) -> str:
    if result.error_code is SearchErrorCode.NO_DATA_IN_RANGE:
        return (
            f"There are {result.stations_in_radius} stations within the radius, but none "
            f"have data for the selected time range ({start}-{end}). "
            "Try adjusting the start/end year."
        )
    return "No stations found in this area. Try increasing the radius."


@router.get("/stations", response_model=StationsResponse)
def search_stations(
    request: Request,
    service: Annotated[StationSearchService, Depends(get_search_service)],
    lat: Annotated[float, Query(ge=-90, le=90)],
    long: Annotated[float, Query(ge=-180, le=180)],
    radius: Annotated[int, Query(ge=0)],
    limit: Annotated[int, Query(ge=1)],
    start: Annotated[int, Query()],
    end: Annotated[int, Query()],
) -> StationsResponse | JSONResponse:
    if start > end:
        return error_response(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            message="The start year must not be after the end year.",
            code="validation_error",
        )

    result = service.search(
        lat=lat, lon=long, radius_km=radius, limit=limit, start_year=start, end_year=end
    )
    if result.error_code is None:
        return StationsResponse(data=[StationOut.model_validate(s.__dict__) for s in result.stations])
    return StationsResponse(
        data=[],
        error_message=describe_search_error(result, start=start, end=end),
        error_code=result.error_code.value,
    )


@router.get("/station", response_model=StationDetailResponse)
def station_detail(
    request: Request,
    service: Annotated[StationDetailService, Depends(get_station_detail_service)],
    station_id: Annotated[str, Query(alias="id", pattern=STATION_ID_PATTERN)],
) -> StationDetailResponse | JSONResponse:
    try:
        detail = service.detail(station_id)
    except UpstreamStatusError as e:
        logger.warning("Upstream rejected station %s: %s", station_id, e)
        return error_response(
            request,
            status_code=(
                status.HTTP_404_NOT_FOUND
                if e.status_code == status.HTTP_404_NOT_FOUND
                else status.HTTP_503_SERVICE_UNAVAILABLE
            ),
            message=str(e),
            code="upstream_status",
        )
    except UpstreamError as e:
        logger.warning("Fetching station %s failed: %s", station_id, e)
        return error_response(
            request,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            message=str(e),
            code="upstream_unavailable",
        )

    return StationDetailResponse(
        data=StationDetailOut(
            annual=[AnnualOut.model_validate(a.__dict__) for a in detail.annual],
            seasonal=[SeasonalOut.model_validate(s.__dict__) for s in detail.seasonal],
        )
    )
