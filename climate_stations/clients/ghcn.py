from __future__ import annotations

import csv
from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from climate_stations.core.errors import UpstreamNetworkError, UpstreamStatusError

GHCN_BASE_URL = "https://noaa-ghcn-pds.s3.amazonaws.com"


class GhcnClient:
    """Streaming reader for the GHCN-Daily bucket.

    Every method returns a lazy iterator: the request is issued on first
    iteration and the response is consumed line by line. A non-200 status
    raises ``UpstreamStatusError``; transport failures (including timeouts)
    raise ``UpstreamNetworkError``. Nothing is retried.
    """

    def __init__(
        self,
        *,
        user_agent: str,
        timeout_seconds: float,
        base_url: str = GHCN_BASE_URL,
        stations_path: str = "ghcnd-stations.txt",
        inventory_path: str = "ghcnd-inventory.txt",
        observations_path: str = "csv/by_station",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._stations_path = stations_path.strip("/")
        self._inventory_path = inventory_path.strip("/")
        self._observations_path = observations_path.strip("/")
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def station_lines(self) -> Iterator[str]:
        yield from self._iter_lines(self._url(self._stations_path), what="Station list")

    def inventory_lines(self) -> Iterator[str]:
        yield from self._iter_lines(self._url(self._inventory_path), what="Inventory")

    def observation_rows(self, station_id: str) -> Iterator[list[str]]:
        url = self._url(f"{self._observations_path}/{station_id}.csv")
        with self._stream(url, what=f"Station {station_id}") as resp:
            yield from csv.reader(resp.iter_lines())

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path}"

    def _iter_lines(self, url: str, *, what: str) -> Iterator[str]:
        with self._stream(url, what=what) as resp:
            yield from resp.iter_lines()

    @contextmanager
    def _stream(self, url: str, *, what: str) -> Iterator[httpx.Response]:
        try:
            with self._client.stream("GET", url) as resp:
                if resp.status_code != httpx.codes.OK:
                    reason = "not found" if resp.status_code == 404 else "unavailable"
                    raise UpstreamStatusError(
                        f"{what} {reason} (status {resp.status_code})",
                        url=url,
                        status_code=resp.status_code,
                    )
                yield resp
        except httpx.HTTPError as e:
            raise UpstreamNetworkError(f"Network error fetching {url}: {e}") from e
