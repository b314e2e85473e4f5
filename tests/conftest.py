from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from climate_stations.core.config import Settings
from climate_stations.factory import create_app
from tests.fakes import FakeGhcnClient, inventory_line, observation_csv, station_line


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        env="test",
        debug=True,
        docs_enabled=False,
        cors_origins=["http://localhost"],
        trusted_hosts=["testserver", "localhost"],
        ghcn_base_url="http://example.com",
        http_user_agent="test-agent",
        http_timeout_seconds=1.0,
        cache_ttl_seconds=3600,
    )


@pytest.fixture()
def fake_ghcn() -> FakeGhcnClient:
    return FakeGhcnClient(
        stations=[
            station_line("GM000003342", 52.5200, 13.4050, "BERLIN-DAHLEM"),
            station_line("GM000010147", 52.3906, 13.0645, "POTSDAM"),
            station_line("GM000004204", 51.0504, 13.7373, "DRESDEN-KLOTZSCHE"),
            station_line("FR000007150", 48.8566, 2.3522, "PARIS-MONTSOURIS"),
        ],
        inventory=[
            inventory_line("GM000003342", "TMAX", 1876, 2023),
            inventory_line("GM000003342", "TMIN", 1880, 2024),
            inventory_line("GM000003342", "PRCP", 1850, 2024),
            inventory_line("GM000010147", "TMAX", 1893, 1950),
            inventory_line("GM000010147", "TMIN", 1893, 1950),
            inventory_line("GM000004204", "TMAX", 1934, 2024),
            inventory_line("FR000007150", "TMAX", 1900, 2024),
        ],
        observations={
            "GM000003342": observation_csv(
                [
                    ("20200115", "TMIN", "-20", ""),
                    ("20200115", "TMAX", "40", ""),
                    ("20200716", "TMIN", "150", ""),
                    ("20200716", "TMAX", "280", ""),
                    ("20200717", "TMAX", "-9999", ""),
                    ("20200717", "PRCP", "12", ""),
                    ("20211201", "TMIN", "10", ""),
                ]
            ),
        },
    )


@pytest.fixture()
def client(settings: Settings, fake_ghcn: FakeGhcnClient) -> TestClient:
    app = create_app(settings, ghcn_client=fake_ghcn)
    with TestClient(app) as client:
        yield client
