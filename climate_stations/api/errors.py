from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from climate_stations.schemas.stations import Envelope, StationDetailResponse, StationsResponse

logger = logging.getLogger(__name__)

INVALID_NUMBER_MESSAGE = "Please provide a valid number."
INVALID_STATION_ID_MESSAGE = "Please provide a valid station ID."

MISSING_PARAM_MESSAGES: dict[str, str] = {
    "lat": "Please provide a latitude.",
    "long": "Please provide a longitude.",
    "radius": "Please provide a radius.",
    "limit": "Please provide a selection limit.",
    "start": "Please provide a start year.",
    "end": "Please provide an end year.",
    "id": INVALID_STATION_ID_MESSAGE,
}

# Envelope shape per route, so errors carry the same empty payload as successes.
_ENVELOPES: dict[str, type[Envelope]] = {
    "/api/stations": StationsResponse,
    "/api/station": StationDetailResponse,
}


def error_response(
    request: Request,
    *,
    status_code: int,
    message: str,
    code: str | None = None,
) -> JSONResponse:
    model = _ENVELOPES.get(request.url.path, StationDetailResponse)
    body = model(error_message=message, error_code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    for err in errors:
        field = err.get("loc", ())[-1:]
        if err.get("type") == "missing" and field and field[0] in MISSING_PARAM_MESSAGES:
            return MISSING_PARAM_MESSAGES[field[0]]
    for err in errors:
        if err.get("loc", ())[-1:] == ("id",):
            return INVALID_STATION_ID_MESSAGE
    return INVALID_NUMBER_MESSAGE


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _validation_message(exc)
    logger.debug("Rejected %s: %s", request.url.path, exc.errors())
    return error_response(
        request,
        status_code=status.HTTP_400_BAD_REQUEST,
        message=message,
        code="validation_error",
    )
