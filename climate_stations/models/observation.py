from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

MISSING_VALUE = -9999


class Element(str, Enum):
    TMIN = "TMIN"
    TMAX = "TMAX"

    @classmethod
    def parse(cls, value: str) -> Element | None:
        try:
            return cls(value)
        except ValueError:
            return None


class Season(str, Enum):
    WINTER = "Winter"
    SPRING = "Spring"
    SUMMER = "Summer"
    AUTUMN = "Autumn"


@dataclass(frozen=True)
class RawObservation:
    date: date
    element: Element
    value: int  # tenths of a degree Celsius


@dataclass(frozen=True)
class AnnualSummary:
    year: int
    tmin: float | None
    tmax: float | None


@dataclass(frozen=True)
class SeasonalSummary:
    year: int
    season: Season
    tmin: float | None
    tmax: float | None


@dataclass(frozen=True)
class StationDetail:
    station_id: str
    annual: list[AnnualSummary]
    seasonal: list[SeasonalSummary]
