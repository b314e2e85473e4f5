from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from climate_stations.models.observation import Season


class StationOut(BaseModel):
    id: str = Field(min_length=1, max_length=11)
    name: str
    latitude: float | None = None
    longitude: float | None = None
    distance: float = Field(ge=0)


class AnnualOut(BaseModel):
    year: int
    tmin: float | None = None
    tmax: float | None = None


class SeasonalOut(BaseModel):
    year: int
    season: Season
    tmin: float | None = None
    tmax: float | None = None


class StationDetailOut(BaseModel):
    annual: list[AnnualOut] = Field(default_factory=list)
    seasonal: list[SeasonalOut] = Field(default_factory=list)


class Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error_message: str = Field(default="", alias="errorMessage")
    error_code: str | None = Field(default=None, alias="errorCode")


class StationsResponse(Envelope):
    data: list[StationOut] = Field(default_factory=list)


class StationDetailResponse(Envelope):
    data: StationDetailOut | None = None
