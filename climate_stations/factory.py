from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.trustedhost import TrustedHostMiddleware

from climate_stations.api.errors import validation_exception_handler
from climate_stations.api.router import api_router
from climate_stations.clients.ghcn import GhcnClient
from climate_stations.core.config import Settings, load_settings
from climate_stations.core.errors import UpstreamError
from climate_stations.services.cache import StationDataCache
from climate_stations.services.ingestion import StationDataLoader
from climate_stations.services.registry import StationRegistry

logger = logging.getLogger(__name__)


def create_ghcn_client(settings: Settings) -> GhcnClient:
    return GhcnClient(
        user_agent=settings.http_user_agent,
        timeout_seconds=settings.http_timeout_seconds,
        base_url=str(settings.ghcn_base_url),
        stations_path=settings.ghcn_stations_path,
        inventory_path=settings.ghcn_inventory_path,
        observations_path=settings.ghcn_observations_path,
    )


def create_app(settings: Settings | None = None, *, ghcn_client: GhcnClient | None = None) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = ghcn_client or create_ghcn_client(settings)
        registry = StationRegistry()
        if settings.load_registry_on_startup:
            try:
                await run_in_threadpool(registry.load, client)
            except UpstreamError:
                logger.exception("Could not load the station registry, aborting startup")
                client.close()
                raise

        app.state.ghcn_client = client
        app.state.registry = registry
        app.state.station_cache = StationDataCache(
            StationDataLoader(client),
            ttl_seconds=settings.cache_ttl_seconds,
            max_entries=settings.cache_max_entries,
        )
        yield
        client.close()

    docs_enabled = settings.docs_enabled and not settings.is_production
    app = FastAPI(
        title="Climate Stations API",
        version="0.1.0",
        debug=settings.debug,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    if settings.trusted_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Cross-Origin-Resource-Policy", "cross-origin")
        if settings.is_production:
            response.headers.setdefault(
                "Strict-Transport-Security", "max-age=31536000; includeSubDomains"
            )
        return response

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/status", tags=["meta"], response_class=PlainTextResponse)
    def status() -> str:
        return "OK\n"

    app.include_router(api_router)
    return app
