from __future__ import annotations

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CLIMATE_",
        case_sensitive=False,
    )

    env: str = Field(default="development")
    debug: bool = Field(default=False)
    docs_enabled: bool = Field(default=True)
    log_level: str = Field(default="INFO", min_length=1)

    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    trusted_hosts: list[str] = Field(default_factory=lambda: ["localhost", "127.0.0.1"])

    ghcn_base_url: AnyHttpUrl = Field(default="https://noaa-ghcn-pds.s3.amazonaws.com")
    ghcn_stations_path: str = Field(default="ghcnd-stations.txt", min_length=1)
    ghcn_inventory_path: str = Field(default="ghcnd-inventory.txt", min_length=1)
    ghcn_observations_path: str = Field(default="csv/by_station", min_length=1)

    http_user_agent: str = Field(
        default="climate-stations/0.1 (contact: you@example.com)",
        min_length=3,
        max_length=256,
    )
    http_timeout_seconds: float = Field(default=30.0, ge=1.0, le=300.0)

    cache_ttl_seconds: int = Field(default=60 * 60, ge=1, le=60 * 60 * 24 * 7)
    cache_max_entries: int = Field(default=0, ge=0)

    load_registry_on_startup: bool = Field(default=True)

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


def load_settings() -> Settings:
    return Settings()
