"""Annual and seasonal temperature means.

Observation values are tenths of a degree Celsius. Each mean is computed in
tenths, divided by ten and rounded half away from zero to two decimals. A
mean is ``None`` when the period has no observation of that element; it is
never reported as zero. Readings carrying the -9999 missing-value sentinel
are ignored.

Seasons follow calendar months: December counts toward the winter of its own
year, alongside January and February, so a "Winter 2020" row mixes
Jan/Feb 2020 with Dec 2020 and is not continuous across the year boundary.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from climate_stations.models.observation import (
    MISSING_VALUE,
    AnnualSummary,
    Element,
    RawObservation,
    Season,
    SeasonalSummary,
)

SEASON_BY_MONTH: dict[int, Season] = {
    12: Season.WINTER,
    1: Season.WINTER,
    2: Season.WINTER,
    3: Season.SPRING,
    4: Season.SPRING,
    5: Season.SPRING,
    6: Season.SUMMER,
    7: Season.SUMMER,
    8: Season.SUMMER,
    9: Season.AUTUMN,
    10: Season.AUTUMN,
    11: Season.AUTUMN,
}

SEASON_ORDER: dict[Season, int] = {
    Season.WINTER: 0,
    Season.SPRING: 1,
    Season.SUMMER: 2,
    Season.AUTUMN: 3,
}


def season_for_month(month: int) -> Season:
    return SEASON_BY_MONTH[month]


def _round2(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass
class _Totals:
    min_sum: int = 0
    min_count: int = 0
    max_sum: int = 0
    max_count: int = 0

    def add(self, obs: RawObservation) -> None:
        if obs.element is Element.TMIN:
            self.min_sum += obs.value
            self.min_count += 1
        elif obs.element is Element.TMAX:
            self.max_sum += obs.value
            self.max_count += 1

    @property
    def tmin(self) -> float | None:
        return _mean_degrees(self.min_sum, self.min_count)

    @property
    def tmax(self) -> float | None:
        return _mean_degrees(self.max_sum, self.max_count)


def _valid(observations: Iterable[RawObservation] | None) -> Iterable[RawObservation]:
    return (obs for obs in observations or () if obs.value != MISSING_VALUE)


def _mean_degrees(total: int, count: int) -> float | None:
    if count == 0:
        return None
    return _round2(total / count / 10)


def annual_averages(observations: Iterable[RawObservation] | None) -> list[AnnualSummary]:
    totals: dict[int, _Totals] = {}
    for obs in _valid(observations):
        totals.setdefault(obs.date.year, _Totals()).add(obs)

    return [
        AnnualSummary(year=year, tmin=t.tmin, tmax=t.tmax)
        for year, t in sorted(totals.items())
    ]


def seasonal_averages(observations: Iterable[RawObservation] | None) -> list[SeasonalSummary]:
    totals: dict[tuple[int, Season], _Totals] = {}
    for obs in _valid(observations):
        key = (obs.date.year, season_for_month(obs.date.month))
        totals.setdefault(key, _Totals()).add(obs)

    ordered = sorted(totals.items(), key=lambda item: (item[0][0], SEASON_ORDER[item[0][1]]))
    return [
        SeasonalSummary(year=year, season=season, tmin=t.tmin, tmax=t.tmax)
        for (year, season), t in ordered
    ]
