from __future__ import annotations

import csv
import io
from collections import Counter

from climate_stations.core.errors import UpstreamStatusError


def station_line(
    station_id: str,
    lat: float,
    lon: float,
    name: str,
    *,
    elevation: float = 34.0,
    state: str = "",
) -> str:
    # ID, LATITUDE, LONGITUDE, ELEVATION, STATE, NAME (ghcnd-stations.txt layout)
    return f"{station_id:<11} {lat:8.4f} {lon:9.4f} {elevation:6.1f} {state:<2} {name:<30} GSN     10384"


def inventory_line(station_id: str, element: str, first: int, last: int) -> str:
    return f"{station_id:<11} {0.0:8.4f} {0.0:9.4f} {element:<4} {first:4d} {last:4d}"


def observation_csv(rows: list[tuple[str, str, str, str]], *, station_id: str = "GM000003342") -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(["ID", "DATE", "ELEMENT", "DATA_VALUE", "M_FLAG", "Q_FLAG", "S_FLAG", "OBS_TIME"])
    for date, element, value, flag in rows:
        writer.writerow([station_id, date, element, value, "", flag, "E", ""])
    return buf.getvalue()


class FakeGhcnClient:
    def __init__(
        self,
        *,
        stations: list[str] | None = None,
        inventory: list[str] | None = None,
        observations: dict[str, str] | None = None,
    ) -> None:
        self.stations = stations or []
        self.inventory = inventory or []
        self.observations = observations or {}
        self.fetches: Counter[str] = Counter()
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def station_lines(self) -> list[str]:
        return list(self.stations)

    def inventory_lines(self) -> list[str]:
        return list(self.inventory)

    def observation_rows(self, station_id: str) -> list[list[str]]:
        self.fetches[station_id] += 1
        if station_id not in self.observations:
            raise UpstreamStatusError(
                f"Station {station_id} not found (status 404)",
                url=f"https://example.invalid/csv/by_station/{station_id}.csv",
                status_code=404,
            )
        return list(csv.reader(io.StringIO(self.observations[station_id])))


class FakeClock:
    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingLoader:
    def __init__(self, observations=None) -> None:
        self.calls: Counter[str] = Counter()
        self._observations = observations or []

    def load(self, station_id: str):
        self.calls[station_id] += 1
        return list(self._observations)
